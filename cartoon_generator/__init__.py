"""Cartoon Generator - photo to comic strip workflow."""
