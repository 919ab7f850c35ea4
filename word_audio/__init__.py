"""
Word audio - pronunciation audio blocks and offline audio cache for vocabulary notes
"""

__version__ = "1.0.0"
__description__ = "Attach pronunciation audio to vocabulary notes and cache it locally"

from .core.factory import create_app, create_word_audio_service

__all__ = ["create_app", "create_word_audio_service"]
