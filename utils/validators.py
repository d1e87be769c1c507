from typing import Optional

from codec import DELIMITER


class TextValidator:
    """Checks applied to free-text input before it reaches the library."""

    @staticmethod
    def is_blank(text: Optional[str]) -> bool:
        return text is None or not text.strip()

    @staticmethod
    def has_delimiter(text: Optional[str]) -> bool:
        # The data file does not quote fields, a comma would shift the columns
        return text is not None and DELIMITER in text

    @staticmethod
    def validate_text(text: Optional[str]) -> Optional[str]:
        """Return an error message for invalid text, or None if it is acceptable."""
        if TextValidator.is_blank(text):
            return "Value cannot be empty."
        if TextValidator.has_delimiter(text):
            return f"Value cannot contain '{DELIMITER}'."
        return None

    @staticmethod
    def validate_title(title: Optional[str]) -> Optional[str]:
        return TextValidator.validate_text(title)

    @staticmethod
    def validate_author(author: Optional[str]) -> Optional[str]:
        return TextValidator.validate_text(author)
