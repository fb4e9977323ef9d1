"""
Program Catalog

Immutable, explicitly constructed view over the static admissions dataset.
Build one at process start and hand it to every component that needs it.
"""

from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from . import catalog_data
from .contracts import FeeSchedule, Program


def _freeze_requirements(entries) -> Optional[tuple]:
    if entries is None:
        return None
    return tuple(
        tuple(entry) if isinstance(entry, (list, tuple)) else entry
        for entry in entries
    )


class ProgramCatalog:
    """
    Read-only program dataset.

    Programs keep the order of `program_names`; several lookups return the
    first hit in that order.
    """

    def __init__(
        self,
        program_names: Sequence[str],
        program_to_college: Mapping[str, str],
        cutoffs: Optional[Mapping[str, object]] = None,
        college_fees: Optional[Mapping[str, Mapping[str, float]]] = None,
        elective_requirements: Optional[Mapping[str, Sequence]] = None,
        default_fees: Optional[Mapping[str, float]] = None,
    ):
        cutoffs = cutoffs or {}
        college_fees = college_fees or {}
        elective_requirements = elective_requirements or {}
        fallback = FeeSchedule(**default_fees) if default_fees else None

        programs: Dict[str, Program] = {}
        for name in program_names:
            if name in programs:
                raise ValueError(f"Duplicate program name in catalog: {name}")
            college = program_to_college.get(name)
            if not college:
                raise ValueError(f"Program has no college: {name}")

            fee_entry = college_fees.get(college)
            programs[name] = Program(
                name=name,
                college=college,
                cutoff=cutoffs.get(name),
                fees=FeeSchedule(**fee_entry) if fee_entry else fallback,
                elective_requirements=_freeze_requirements(elective_requirements.get(name)),
            )

        self._programs: Mapping[str, Program] = MappingProxyType(programs)
        self._by_lower: Mapping[str, str] = MappingProxyType({n.lower(): n for n in programs})

    @classmethod
    def from_defaults(cls) -> "ProgramCatalog":
        """Catalog built from the bundled KNUST dataset."""
        return cls(
            program_names=catalog_data.VALID_PROGRAMS,
            program_to_college=catalog_data.PROGRAM_TO_COLLEGE,
            cutoffs=catalog_data.CUTOFF_AGGREGATES,
            college_fees=catalog_data.COLLEGE_FEES,
            elective_requirements=catalog_data.ELECTIVE_REQUIREMENTS,
            default_fees=catalog_data.DEFAULT_FEES,
        )

    def __len__(self) -> int:
        return len(self._programs)

    def __iter__(self) -> Iterator[Program]:
        return iter(self._programs.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._by_lower

    @property
    def names(self) -> List[str]:
        return list(self._programs)

    @property
    def colleges(self) -> List[str]:
        seen: List[str] = []
        for program in self._programs.values():
            if program.college not in seen:
                seen.append(program.college)
        return seen

    def get(self, name: str) -> Optional[Program]:
        """Exact or case-insensitive lookup by program name."""
        if not name:
            return None
        program = self._programs.get(name)
        if program is not None:
            return program
        canonical = self._by_lower.get(name.lower())
        return self._programs[canonical] if canonical else None

    def by_college(self, college: str) -> List[Program]:
        needle = college.lower()
        return [p for p in self._programs.values() if needle in p.college.lower()]
