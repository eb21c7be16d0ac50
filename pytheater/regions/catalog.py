"""
Template registry, exclusion index and stage queue of a region.

Layout of the data built while templates are registered:

    templates    name -> Template
    candidates   objtype -> [CandidateEntry(TEMPLATE, name) | CandidateEntry(EXCLUSION, group)]
    exclusions   group -> ExclusionGroup(objtype, [member names in discovery order])
    stages       stage -> [Template, ...]            (stage > 1 only)

An exclusion group appears exactly once in its objtype's candidate list no
matter how many members it has; picking it spawns one member.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

from ..classes.template import Template
from ..errors import DuplicateTemplateError, ExclusionTypeMismatchError


class CandidateKind(Enum):
    TEMPLATE = "template"
    EXCLUSION = "exclusion"


@dataclass(frozen=True)
class CandidateEntry:
    """One selectable slot for an objtype: a template or a whole exclusion group."""
    kind: CandidateKind
    name: str

    @classmethod
    def template(cls, name: str) -> "CandidateEntry":
        return cls(CandidateKind.TEMPLATE, name)

    @classmethod
    def exclusion(cls, name: str) -> "CandidateEntry":
        return cls(CandidateKind.EXCLUSION, name)

    def resolve(self, exclusions: "ExclusionIndex", pick_index: Callable[[int], int]) -> str:
        """
        Return the template name this entry spawns.

        Args:
            exclusions: Index holding the group members
            pick_index: Draws a uniform index in [0, n) for group members
        """
        if self.kind is CandidateKind.TEMPLATE:
            return self.name
        if self.kind is CandidateKind.EXCLUSION:
            members = exclusions[self.name].members
            return members[pick_index(len(members))]
        raise ValueError(f"Unhandled candidate kind {self.kind!r}")


@dataclass
class ExclusionGroup:
    name: str
    objtype: str
    members: List[str] = field(default_factory=list)


class ExclusionIndex:
    """Mutually exclusive template groups, keyed by group name."""

    def __init__(self):
        self._groups: Dict[str, ExclusionGroup] = {}

    def register(self, template: Template) -> bool:
        """
        Add a template to its exclusion group, creating the group on first sight.

        Returns:
            True if this call created the group

        Raises:
            ExclusionTypeMismatchError: If the template's objtype differs from
                the group's
        """
        self.check(template)
        group = self._groups.get(template.exclusion)
        created = group is None
        if created:
            group = ExclusionGroup(template.exclusion, template.objtype)
            self._groups[template.exclusion] = group
        group.members.append(template.name)
        return created

    def check(self, template: Template):
        """Raise if the template cannot join its exclusion group."""
        group = self._groups.get(template.exclusion)
        if group is not None and group.objtype != template.objtype:
            raise ExclusionTypeMismatchError(
                f"exclusions across objective types not allowed, '{template.name}' "
                f"is '{template.objtype}' but group '{group.name}' is '{group.objtype}'"
            )

    def get(self, name: str) -> Optional[ExclusionGroup]:
        return self._groups.get(name)

    def __getitem__(self, name: str) -> ExclusionGroup:
        return self._groups[name]

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[ExclusionGroup]:
        return iter(self._groups.values())


class TemplateCatalog:
    """Registry of immediately generated templates and their candidate lists."""

    def __init__(self):
        self._templates: Dict[str, Template] = {}
        self._candidates: Dict[str, List[CandidateEntry]] = {}
        self.exclusions = ExclusionIndex()

    def add(self, template: Template, index: bool = True):
        """
        Register a template.

        Args:
            template: Template to store
            index: When False the template is only stored by name and never
                becomes a selection candidate

        Raises:
            DuplicateTemplateError: If the name is already registered
            ExclusionTypeMismatchError: If its exclusion group has another objtype
        """
        if template.name in self._templates:
            raise DuplicateTemplateError(
                f"duplicate template '{template.name}' defined; {template.path}"
            )
        if index and template.exclusion is not None:
            # a rejected template must leave no trace in the registry
            self.exclusions.check(template)

        self._templates[template.name] = template
        if not index:
            return

        if template.exclusion is not None:
            if self.exclusions.register(template):
                self._candidates.setdefault(template.objtype, []).append(
                    CandidateEntry.exclusion(template.exclusion)
                )
        else:
            self._candidates.setdefault(template.objtype, []).append(
                CandidateEntry.template(template.name)
            )

    def get(self, name: str) -> Optional[Template]:
        return self._templates.get(name)

    def candidates(self, objtype: str) -> List[CandidateEntry]:
        """Copy of the candidate list for an objtype (empty if none)."""
        return list(self._candidates.get(objtype, ()))

    def objtypes(self) -> List[str]:
        return list(self._candidates)

    def snapshot(self) -> Dict[str, List[CandidateEntry]]:
        """Independent copy of every candidate list, safe to consume."""
        return {objtype: list(entries) for objtype, entries in self._candidates.items()}

    def names(self) -> List[str]:
        return list(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)


class StageQueue:
    """Templates deferred to a later stage, bucketed by stage number."""

    def __init__(self):
        self._buckets: Dict[int, List[Template]] = {}

    def add(self, template: Template):
        if template.stage == 1:
            raise ValueError(f"Template '{template.name}' is stage 1 and cannot be deferred")
        self._buckets.setdefault(template.stage, []).append(template)

    def take(self, stage: int) -> List[Template]:
        """Remove and return the bucket for a stage ([] if empty or unknown)."""
        return self._buckets.pop(stage, [])

    def pending(self, stage: int) -> List[Template]:
        return list(self._buckets.get(stage, ()))

    def stages(self) -> List[int]:
        return sorted(self._buckets)

    def names(self) -> List[str]:
        return [tpl.name for bucket in self._buckets.values() for tpl in bucket]

    def __contains__(self, name: object) -> bool:
        return any(tpl.name == name for bucket in self._buckets.values() for tpl in bucket)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())
