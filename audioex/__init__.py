"""
audioex - Lossless audio stream extraction for Blu-ray and DVD rips.

Pulls a single audio stream out of an .m2ts or .VOB container into a WAV
file: stream copy first, PCM re-encode only when the copy fails.
"""

__version__ = "0.1.0"
