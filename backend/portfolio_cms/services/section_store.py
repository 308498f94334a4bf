"""
Section store - one upserted record per fixed section type

Persisted document:
    {"sections": {type: section}}

Sections are never deleted; the id is derived from the type
("section_hero"). Default content is seeded per type only when that type
has no record yet, so admin edits survive restarts.
"""

import logging
from typing import Any, Dict, Optional

from portfolio_cms.schemas.section import Section, SectionType
from portfolio_cms.core.exceptions import OperationNotSupported
from portfolio_cms.core.records import utcnow
from portfolio_cms.services.record_store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_SECTIONS: Dict[str, Dict[str, Any]] = {
    SectionType.HERO.value: {
        "title": "Full Stack Developer",
        "subtitle": "Building Modern Web Applications",
        "description": "I create beautiful, functional, and user-friendly websites and applications using cutting-edge technologies.",
        "ctaText": "View My Work",
        "ctaUrl": "#portfolio",
        "socialLinks": {
            "github": "https://github.com/yourusername",
            "linkedin": "https://linkedin.com/in/yourusername",
            "email": "your.email@example.com",
        },
    },
    SectionType.ABOUT.value: {
        "title": "About Me",
        "biography": "I'm a passionate full-stack developer with experience in modern web technologies. I love creating efficient, scalable applications that solve real-world problems.",
        "skills": ["JavaScript", "TypeScript", "React", "Next.js", "Node.js", "Python", "SQL", "MongoDB"],
        "experience": [
            {
                "company": "Your Company",
                "role": "Full Stack Developer",
                "duration": "2022 - Present",
                "description": "Led development of multiple web applications using React and Node.js",
            }
        ],
        "certifications": [],
    },
    SectionType.TEAM.value: {
        "title": "Meet the Team",
        "description": "The people behind the projects.",
        "showSpecialties": True,
    },
    SectionType.TOOLS.value: {
        "title": "Tools & Technologies",
        "categories": [
            {
                "name": "Frontend",
                "tools": [
                    {"name": "React", "proficiency": 90},
                    {"name": "Next.js", "proficiency": 85},
                    {"name": "TypeScript", "proficiency": 80},
                    {"name": "Tailwind CSS", "proficiency": 85},
                ],
            },
            {
                "name": "Backend",
                "tools": [
                    {"name": "Node.js", "proficiency": 85},
                    {"name": "Express", "proficiency": 80},
                    {"name": "PostgreSQL", "proficiency": 75},
                    {"name": "MongoDB", "proficiency": 70},
                ],
            },
        ],
    },
    SectionType.CONTACT.value: {
        "title": "Get In Touch",
        "description": "I'm always open to discussing new opportunities and interesting projects.",
        "email": "your.email@example.com",
        "socialLinks": {
            "github": "https://github.com/yourusername",
            "linkedin": "https://linkedin.com/in/yourusername",
        },
    },
    SectionType.FOOTER.value: {
        "copyrightText": "© 2024 Your Name. All rights reserved.",
        "links": [
            {"name": "Privacy Policy", "url": "/privacy"},
            {"name": "Terms of Service", "url": "/terms"},
        ],
    },
}


def section_id(section_type: str) -> str:
    return f"section_{section_type}"


class SectionStore(RecordStore[Section]):
    kind = "Section"
    record_model = Section
    records_key = "sections"

    def empty(self) -> Dict[str, Any]:
        return {self.records_key: {}}

    @staticmethod
    def _section_type(section_type: str) -> str:
        try:
            return SectionType(section_type).value
        except ValueError:
            raise ValueError(f"Invalid section type: '{section_type}'")

    def get_section(self, section_type: str) -> Optional[Section]:
        raw = self.load()[self.records_key].get(self._section_type(section_type))
        return self._parse(raw) if raw is not None else None

    # Store interface: sections are keyed by type
    get = get_section

    def get_all_sections(self) -> Dict[str, Section]:
        """Present sections keyed by type, in the fixed type order."""
        records = self.load()[self.records_key]
        return {
            t.value: self._parse(records[t.value])
            for t in SectionType
            if t.value in records
        }

    def update_section(self, section_type: str, content: Dict[str, Any]) -> Section:
        """Create or replace the single record for `section_type`."""
        key = self._section_type(section_type)
        if not isinstance(content, dict):
            raise ValueError("Section content must be a JSON object")

        section = Section(id=section_id(key), type=key, content=content, updated_at=utcnow())
        with self.backend.lock:
            document = self.load()
            document[self.records_key][key] = self._dump(section)
            self.save(document)

        logger.info(f"Section updated: {key}")
        return section

    def initialize_default_sections(self) -> None:
        """Seed each missing section type independently."""
        with self.backend.lock:
            existing = self.load()[self.records_key]
            for section_type, content in DEFAULT_SECTIONS.items():
                if section_type in existing:
                    continue
                self.update_section(section_type, content)
                logger.info(f"Default section created: {section_type}")

    initialize_defaults = initialize_default_sections

    def create(self, fields):
        raise OperationNotSupported("Sections are upserted with update_section()")

    def update(self, section_type: str, changes: Dict[str, Any]) -> Section:
        return self.update_section(section_type, changes)

    def delete(self, record_id: str) -> bool:
        raise OperationNotSupported("Sections cannot be deleted")
