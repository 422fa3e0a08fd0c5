"""
CV Document Structure

Hydrated, read-only representation of one CV and its sub-entities.

The document is decoded once at the system boundary (CVDocument.from_dict or
load_cv_document) from stored rows, API payloads or YAML/JSON fixtures:

- camelCase and snake_case keys are both accepted
- common alternate field names are folded into the canonical one
  (e.g. an experience "position" becomes its title)
- every sub-entity gets an id and an order; collections are stable-sorted
  by order, so equal orders keep their stored sequence

Dates stay as the stored strings (normally ISO-8601); the renderer formats
them and passes anything unparseable through verbatim.
"""

from dataclasses import dataclass, fields
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from omegaconf import OmegaConf

from scholarcv.contexts.theming import CustomTheme, decode_theme_data
from scholarcv.utils.text_processing import to_snake_case

E = TypeVar("E")


@dataclass(frozen=True)
class Experience:
    id: str = ""
    order: int = 0
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    summary: Optional[str] = None
    description: Optional[str] = None
    highlights: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Education:
    id: str = ""
    order: int = 0
    degree: Optional[str] = None
    field: Optional[str] = None
    school: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    grade: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Skill:
    id: str = ""
    order: int = 0
    name: Optional[str] = None
    category: Optional[str] = None
    level: Optional[str] = None
    details: Optional[str] = None


@dataclass(frozen=True)
class Publication:
    """
    Publication record. When ``citation`` is set it is rendered verbatim and
    the structured fields are ignored.
    """

    id: str = ""
    order: int = 0
    title: Optional[str] = None
    authors: Optional[str] = None
    year: Optional[str] = None
    journal: Optional[str] = None
    conference: Optional[str] = None
    volume: Optional[str] = None
    number: Optional[str] = None
    pages: Optional[str] = None
    doi: Optional[str] = None
    url: Optional[str] = None
    publication_type: Optional[str] = None
    citation: Optional[str] = None


@dataclass(frozen=True)
class Project:
    id: str = ""
    order: int = 0
    name: Optional[str] = None
    role: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    highlights: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Certification:
    id: str = ""
    order: int = 0
    name: Optional[str] = None
    issuer: Optional[str] = None
    date: Optional[str] = None
    credential_id: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Award:
    id: str = ""
    order: int = 0
    title: Optional[str] = None
    issuer: Optional[str] = None
    date: Optional[str] = None
    year: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Language:
    id: str = ""
    order: int = 0
    language: Optional[str] = None
    proficiency: Optional[str] = None


@dataclass(frozen=True)
class Reference:
    id: str = ""
    order: int = 0
    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None


@dataclass(frozen=True)
class CustomItem:
    id: str = ""
    order: int = 0
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    details: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CustomSection:
    """User-defined section: either a list of items or one free-text block."""

    id: str = ""
    order: int = 0
    title: Optional[str] = None
    content: Optional[str] = None
    items: Tuple[CustomItem, ...] = ()


@dataclass(frozen=True)
class SocialLink:
    id: str = ""
    order: int = 0
    platform: Optional[str] = None
    url: Optional[str] = None
    label: Optional[str] = None


@dataclass(frozen=True)
class ContactInfo:
    id: str = ""
    order: int = 0
    type: Optional[str] = None
    value: Optional[str] = None
    label: Optional[str] = None
    is_primary: bool = False


# Alternate field names -> canonical field, per entity type.
# Canonical values win; an alias only fills a missing or empty field.
FIELD_ALIASES: Dict[type, Dict[str, str]] = {
    Experience: {"position": "title", "organization": "company", "city": "location"},
    Education: {
        "qualification": "degree",
        "field_of_study": "field",
        "institution": "school",
        "university": "school",
        "gpa": "grade",
    },
    Skill: {"skill": "name", "title": "name", "group": "category", "proficiency": "level", "description": "details"},
    Publication: {"type": "publication_type", "issue": "number"},
    Project: {"title": "name", "link": "url"},
    Certification: {
        "title": "name",
        "organization": "issuer",
        "date_awarded": "date",
        "license_number": "credential_id",
    },
    Award: {"name": "title", "organization": "issuer"},
    Language: {"name": "language", "level": "proficiency"},
    Reference: {"full_name": "name", "position": "title", "organization": "company"},
    CustomItem: {"label": "title", "meta": "subtitle", "description": "content", "value": "content"},
    CustomSection: {"description": "content"},
    SocialLink: {"link": "url"},
    ContactInfo: {},
}

# Alternate collection keys on the CV itself, tried in order after the canonical key
COLLECTION_ALIASES = {
    "experience": ("experiences", "work_experience"),
    "education": ("educations",),
    "skills": ("skill_groups",),
    "publications": (),
    "projects": ("project_experience",),
    "certifications": (),
    "awards": ("honors",),
    "languages": ("language_skills",),
    "references": ("referees",),
    "custom_sections": (),
    "social_links": (),
    "contact_info": (),
}

# Field receiving a bare string entry (e.g. skills: ["Python", "SQL"])
STRING_ENTRY_FIELD = {Skill: "name", Language: "language"}


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    text = str(value).strip()
    return text or None


TRUE_STRINGS = {"true", "1", "yes", "on"}
FALSE_STRINGS = {"false", "0", "no", "off", ""}


def _flag(value: Any, default: bool = False) -> bool:
    """Stored booleans may arrive as form/JSON strings ("false", "1")."""
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
        return default
    return bool(value)


def _text_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.splitlines()
    if not isinstance(value, Iterable):
        return ()
    return tuple(text for text in (_text(item) for item in value) if text)


def _order(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _normalize_keys(raw: Mapping[str, Any], aliases: Mapping[str, str]) -> Dict[str, Any]:
    data = {to_snake_case(str(key)): value for key, value in raw.items()}
    for alias, canonical in aliases.items():
        if data.get(canonical) in (None, "") and data.get(alias) not in (None, ""):
            data[canonical] = data[alias]
    return data


def build_entity(cls: Type[E], raw: Any, index: int, prefix: str) -> Optional[E]:
    """
    Decode one sub-entity.

    Args:
        cls: Entity dataclass
        raw: Mapping (or a bare string for skills and languages)
        index: Position in the stored collection; default order and id suffix
        prefix: Id prefix for entities stored without an id

    Returns:
        Entity instance, or None for null or malformed entries
    """
    if isinstance(raw, str) and cls in STRING_ENTRY_FIELD:
        raw = {STRING_ENTRY_FIELD[cls]: raw}
    if not isinstance(raw, Mapping):
        return None

    data = _normalize_keys(raw, FIELD_ALIASES.get(cls, {}))
    values: Dict[str, Any] = {}
    for f in fields(cls):
        value = data.get(f.name)
        if f.name == "id":
            values["id"] = _text(value) or f"{prefix}-{index}"
        elif f.name == "order":
            values["order"] = _order(value, index)
        elif f.name == "items":
            values["items"] = build_collection(CustomItem, value, f"{values['id']}-item")
        elif isinstance(f.default, bool):
            values[f.name] = _flag(value, f.default)
        elif isinstance(f.default, tuple):
            values[f.name] = _text_tuple(value)
        else:
            values[f.name] = _text(value)
    return cls(**values)


def build_collection(cls: Type[E], raw: Any, prefix: str) -> Tuple[E, ...]:
    """Decode a stored collection and stable-sort it by order."""
    if not isinstance(raw, (list, tuple)):
        return ()
    entities = [build_entity(cls, item, index, prefix) for index, item in enumerate(raw)]
    return tuple(sorted((e for e in entities if e is not None), key=lambda e: e.order))


def _hidden_from_section_order(raw: Any) -> Tuple[str, ...]:
    """Section ids disabled in a stored section order ([{id, enabled}, ...])."""
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(
        str(item.get("id"))
        for item in raw
        if isinstance(item, Mapping) and not _flag(item.get("enabled"), True) and item.get("id")
    )


@dataclass(frozen=True)
class CVDocument:
    """
    Read-only CV with its ordered sub-entities.

    Attributes:
        id: CV identifier
        title: CV title (also used for export filenames)
        full_name .. profile_image: Personal scalars
        theme_id: Selected catalog theme (None means the default)
        layout_id: Selected layout (None means the default)
        custom_theme: Decoded custom theme, if any
        citation_style: APA | IEEE | MLA | Chicago | Harvard | Vancouver
        show_numbering: Prefix section headings with 01, 02, ...
        references_available_on_request: Replace references with a single line
        hidden_sections: Section ids never rendered
    """

    id: str = ""
    title: Optional[str] = None
    full_name: Optional[str] = None
    headline: Optional[str] = None
    summary: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    google_scholar: Optional[str] = None
    twitter: Optional[str] = None
    profile_image: Optional[str] = None
    theme_id: Optional[str] = None
    layout_id: Optional[str] = None
    custom_theme: Optional[CustomTheme] = None
    citation_style: str = "APA"
    show_numbering: bool = False
    references_available_on_request: bool = False
    hidden_sections: Tuple[str, ...] = ()
    experience: Tuple[Experience, ...] = ()
    education: Tuple[Education, ...] = ()
    skills: Tuple[Skill, ...] = ()
    publications: Tuple[Publication, ...] = ()
    projects: Tuple[Project, ...] = ()
    certifications: Tuple[Certification, ...] = ()
    awards: Tuple[Award, ...] = ()
    languages: Tuple[Language, ...] = ()
    references: Tuple[Reference, ...] = ()
    custom_sections: Tuple[CustomSection, ...] = ()
    social_links: Tuple[SocialLink, ...] = ()
    contact_info: Tuple[ContactInfo, ...] = ()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "CVDocument":
        """
        Decode a stored or submitted CV mapping.

        Accepts "theme"/"layout" as aliases of theme_id/layout_id and
        "themeData" as an alias of customTheme (JSON string or mapping).

        Args:
            raw: CV mapping with personal fields and sub-entity lists

        Returns:
            CVDocument with every collection sorted by order
        """
        data = {to_snake_case(str(key)): value for key, value in raw.items()}

        collections = {}
        for name, entity_cls in COLLECTION_TYPES.items():
            stored = data.get(name)
            for alias in COLLECTION_ALIASES[name]:
                if stored:
                    break
                stored = data.get(alias)
            collections[name] = build_collection(entity_cls, stored, name)

        hidden = _text_tuple(data.get("hidden_sections")) + _hidden_from_section_order(
            data.get("section_order")
        )
        custom_theme = data.get("custom_theme")
        if custom_theme in (None, ""):
            custom_theme = data.get("theme_data")

        return cls(
            id=_text(data.get("id")) or "",
            title=_text(data.get("title")),
            full_name=_text(data.get("full_name")),
            headline=_text(data.get("headline")),
            summary=_text(data.get("summary")),
            email=_text(data.get("email")),
            phone=_text(data.get("phone")),
            location=_text(data.get("location")),
            website=_text(data.get("website")),
            linkedin=_text(data.get("linkedin")),
            github=_text(data.get("github")),
            google_scholar=_text(data.get("google_scholar")),
            twitter=_text(data.get("twitter")),
            profile_image=_text(data.get("profile_image")),
            theme_id=_text(data.get("theme_id") or data.get("theme")),
            layout_id=_text(data.get("layout_id") or data.get("layout")),
            custom_theme=decode_theme_data(custom_theme),
            citation_style=_text(data.get("citation_style")) or "APA",
            show_numbering=_flag(data.get("show_numbering")),
            references_available_on_request=_flag(data.get("references_available_on_request")),
            hidden_sections=tuple(dict.fromkeys(hidden)),
            **collections,
        )

    def is_hidden(self, section_id: str) -> bool:
        return section_id in self.hidden_sections


COLLECTION_TYPES: Dict[str, type] = {
    "experience": Experience,
    "education": Education,
    "skills": Skill,
    "publications": Publication,
    "projects": Project,
    "certifications": Certification,
    "awards": Award,
    "languages": Language,
    "references": Reference,
    "custom_sections": CustomSection,
    "social_links": SocialLink,
    "contact_info": ContactInfo,
}


def load_cv_document(path: Path) -> CVDocument:
    """
    Load a CV document from a YAML or JSON file.

    Args:
        path: File holding one CV mapping (JSON is valid YAML)

    Returns:
        Decoded CVDocument
    """
    raw = OmegaConf.to_container(OmegaConf.load(Path(path)), resolve=True)
    if not isinstance(raw, Mapping):
        raise ValueError(f"CV file must contain a mapping: {path}")
    return CVDocument.from_dict(raw)
