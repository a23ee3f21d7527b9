"""
audioex.extract - Audio stream extraction from disc containers.

Copies the selected stream untouched when possible and falls back to a
fixed PCM preset per container class:
- DVD (.VOB): 16-bit PCM at 48kHz
- Blu-ray (.m2ts and everything else): 24-bit PCM at the source rate
"""

from __future__ import annotations
