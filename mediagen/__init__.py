"""Uniform image/video generation across Gemini, Replicate and fal.ai."""

__version__ = "0.1.0"
