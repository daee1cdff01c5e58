#!/usr/bin/env python3
"""
CLI for generating a comic strip from a photo and an event.

Runs every wizard stage in order without stopping for edits.

Usage:
    python cli/generate_comic.py photo.jpg "we went to the beach"
    python cli/generate_comic.py --image-url https://example.com/me.png "first day at school"
    python cli/generate_comic.py photo.png "my birthday" --output birthday.pdf --verbose
"""

import argparse
import asyncio
import mimetypes
import re
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cartoon_generator.api.logging import configure_logging
from cartoon_generator.api.services.wizard_service import WizardService
from cartoon_generator.core.clients import OpenAICompletionProvider, ReplicateInferenceProvider
from cartoon_generator.core.modules import (
    CloudinaryUploader,
    ComicWizard,
    ImageGenerator,
    JobPoller,
    PdfExporter,
    PredictionSubmitter,
    PromptPipeline,
)
from cartoon_generator.core.types import WizardState


def build_service(upload: bool) -> WizardService:
    inference = ReplicateInferenceProvider()
    wizard = ComicWizard(
        pipeline=PromptPipeline(OpenAICompletionProvider()),
        image_generator=ImageGenerator(PredictionSubmitter(inference), JobPoller(inference)),
        uploader=CloudinaryUploader() if upload else None,
        exporter=PdfExporter(),
    )
    return WizardService(wizard)


async def run(args) -> int:
    service = build_service(upload=args.photo is not None)
    state = WizardState()
    session_id = "cli"

    def check(result, label: str) -> bool:
        if not result.success:
            print(f"{label} failed ({result.error_type}): {result.error}", file=sys.stderr)
            return False
        if args.verbose:
            print(f"{label}: done (stage {int(result.stage)})")
        return True

    if args.photo:
        photo = Path(args.photo)
        content_type = mimetypes.guess_type(photo.name)[0]
        result = await service.upload_photo(session_id, state, photo.name, photo.read_bytes(), content_type)
        if not check(result, "Upload"):
            return 1

    if not check(await service.describe_character(session_id, state, args.image_url), "Character description"):
        return 1
    if args.verbose:
        print(f"\n{state.character_description}\n")

    if not check(await service.approve_character(session_id, state), "Approve character"):
        return 1

    if not check(await service.write_story(session_id, state, args.event), "Story"):
        return 1
    if args.verbose:
        print(f"\n{state.story}\n")

    if not check(await service.generate_prompts(session_id, state), "Image prompts"):
        return 1
    if args.verbose:
        for i, prompt in enumerate(state.prompts, start=1):
            print(f"{i}. {prompt}")

    if not check(await service.generate_images(session_id, state), "Panels"):
        return 1

    result, pdf_bytes = await service.export_pdf(session_id, state)
    if not check(result, "PDF export"):
        return 1

    if args.output:
        output_path = Path(args.output)
    else:
        output_dir = Path(__file__).parent.parent / "output"
        output_dir.mkdir(exist_ok=True)
        slug = re.sub(r"[^a-z0-9]+", "_", args.event.lower())[:30].strip("_")
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = output_dir / f"{slug}_{timestamp}.pdf"

    output_path.write_bytes(pdf_bytes)
    print(f"Comic saved to: {output_path}")

    for url in state.images:
        print(url)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Generate a comic strip PDF from a photo and an event",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python cli/generate_comic.py photo.jpg "we went to the beach"
    python cli/generate_comic.py --image-url https://example.com/me.png "first day at school"
        """,
    )

    parser.add_argument(
        "photo",
        nargs="?",
        default=None,
        help="Local photo of the main character (JPEG, PNG or GIF)",
    )

    parser.add_argument(
        "event",
        type=str,
        help="What happened, in your own words",
    )

    parser.add_argument(
        "--image-url",
        type=str,
        default=None,
        help="Use an already hosted photo instead of uploading one",
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output PDF path. Auto-generated under output/ if not specified.",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print each intermediate result",
    )

    args = parser.parse_args()

    if not args.photo and not args.image_url:
        parser.error("either a photo path or --image-url is required")

    configure_logging(json_format=False)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
