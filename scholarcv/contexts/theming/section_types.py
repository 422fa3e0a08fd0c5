"""
Known CV section types.

The enum order is the registration order used as the composer's tie-break
when two sections claim the same (column, order) slot.
"""

from enum import Enum
from typing import Optional


class SectionType(str, Enum):
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PUBLICATIONS = "publications"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    AWARDS = "awards"
    LANGUAGES = "languages"
    REFERENCES = "references"
    CUSTOM_SECTIONS = "customSections"

    @property
    def display_title(self) -> str:
        return SECTION_TITLES[self]

    @classmethod
    def parse(cls, value: str) -> Optional["SectionType"]:
        """Look up a section type by placement key, None when unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


SECTION_TITLES = {
    SectionType.SUMMARY: "Summary",
    SectionType.EXPERIENCE: "Experience",
    SectionType.EDUCATION: "Education",
    SectionType.SKILLS: "Skills",
    SectionType.PUBLICATIONS: "Publications",
    SectionType.PROJECTS: "Projects",
    SectionType.CERTIFICATIONS: "Certifications",
    SectionType.AWARDS: "Awards",
    SectionType.LANGUAGES: "Languages",
    SectionType.REFERENCES: "References",
    SectionType.CUSTOM_SECTIONS: "Custom Section",
}

# Placement key for the header region; not a composable section
HEADER_PLACEMENT_KEY = "personal"
