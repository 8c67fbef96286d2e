"""Emoji utility with ASCII fallback for terminals that cannot render them"""

import os
import sys


class EmojiHelper:
    """Helper class for status glyphs with ASCII fallbacks"""

    def __init__(self, enabled=None):
        if enabled is None:
            enabled = self._detect_emoji_support()
        self.emoji_enabled = enabled

    def _detect_emoji_support(self):
        """Detect if terminal supports emoji"""
        term = os.environ.get('TERM', '').lower()
        lang = (os.environ.get('LC_ALL') or os.environ.get('LANG', '')).lower()

        # Disable emojis if explicitly requested
        if os.environ.get('DISABLE_EMOJI', '').lower() in ('1', 'true', 'yes'):
            return False

        # Basic terminals that don't render emojis well
        basic_terms = ['linux', 'dumb', 'cons25', 'vt100', 'vt220']
        if any(t == term for t in basic_terms):
            return False

        encoding = (getattr(sys.stdout, 'encoding', None) or '').lower()
        if 'utf' in encoding:
            return True

        return 'utf' in lang

    # Emoji mappings with ASCII fallbacks
    EMOJI_MAP = {
        '✅': 'OK',     # Check passed
        '⚠️': 'W',      # Warnings in summary
        '⚠': 'W',
        '❌': 'E',      # Errors in summary
    }

    def get(self, emoji, fallback=None):
        """Get emoji or ASCII fallback

        Args:
            emoji: The emoji character
            fallback: Optional custom fallback (uses default if None)

        Returns:
            Emoji if supported, otherwise ASCII fallback
        """
        if self.emoji_enabled:
            return emoji

        if fallback is not None:
            return fallback

        return self.EMOJI_MAP.get(emoji, emoji)

    def enable(self):
        """Force enable emoji"""
        self.emoji_enabled = True

    def disable(self):
        """Force disable emoji"""
        self.emoji_enabled = False

    def is_enabled(self):
        """Check if emoji is enabled"""
        return self.emoji_enabled
