"""
Slug Value Object
URL-safe identifier for a public profile page (/u/{slug})
"""
import re
from dataclasses import dataclass


MAX_SLUG_LENGTH = 50


@dataclass(frozen=True)
class Slug:
    """Profile slug: lowercase letters, digits and hyphens"""

    value: str

    def __post_init__(self):
        """Validate slug format"""
        if not self.is_valid(self.value):
            raise ValueError(f"Invalid slug: {self.value!r}")

    @staticmethod
    def is_valid(slug: str) -> bool:
        return bool(slug) and len(slug) <= MAX_SLUG_LENGTH and bool(re.fullmatch(r"[a-z0-9-]+", slug))

    @staticmethod
    def sanitize(text: str) -> str:
        """Apply the profile form's input rule: lowercase, drop anything else, cap length"""
        return re.sub(r"[^a-z0-9-]", "", text.lower())[:MAX_SLUG_LENGTH]

    @classmethod
    def from_name(cls, first_name: str, last_name: str) -> "Slug":
        """Build 'first-last' from a person's name"""
        slug = f"{first_name}-{last_name}".lower()
        slug = re.sub(r"[^a-z0-9-]", "-", slug)
        slug = re.sub(r"-+", "-", slug).strip("-")
        return cls(slug[:MAX_SLUG_LENGTH].rstrip("-"))

    def __str__(self) -> str:
        return self.value
