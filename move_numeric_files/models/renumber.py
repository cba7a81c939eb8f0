"""Renumbering data models."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class NumericFileName(BaseModel):
    """A filename split into its leading number and the rest of the name."""

    model_config = ConfigDict(frozen=True)

    prefix_digits: int = Field(description="Numeric value of the leading digit run", ge=0)
    width: int = Field(description="Number of digits in the leading run, including zero padding", ge=1)
    remainder: str = Field(description="Everything after the leading digits (separator, stem, extension)")
    original_name: str = Field(description="The filename as found on disk")

    def __str__(self) -> str:
        return f"NumericFileName({self.prefix_digits}, '{self.original_name}')"


class DuplicateGroup(BaseModel):
    """Numbered files in one directory that share the same numeric value."""

    number: int = Field(description="Shared numeric value", ge=0)
    members: list[NumericFileName] = Field(
        description="Files with this number, in directory read order",
        default_factory=list,
    )

    def __len__(self) -> int:
        return len(self.members)

    @property
    def is_duplicate(self) -> bool:
        return len(self.members) > 1

    @property
    def names(self) -> list[str]:
        return [member.original_name for member in self.members]

    def select_keeper(self, keep_file: str | None = None) -> NumericFileName:
        """Pick the member that stays at this number.

        Args:
            keep_file: Preferred filename. Used only when it is an exact member of the group.

        Returns:
            The preferred member if present, otherwise the first member.
        """
        if keep_file is not None:
            for member in self.members:
                if member.original_name == keep_file:
                    return member
        return self.members[0]


class RenameOp(BaseModel):
    """Move a single file to a new number."""

    source: Path = Field(description="Current path of the file")
    target: Path = Field(description="Path after renumbering")
    old_number: int = Field(description="Number the file currently carries", ge=0)
    new_number: int = Field(description="Number the file is moved to", ge=0)

    def __str__(self) -> str:
        return f"RenameOp('{self.source.name}' -> '{self.target.name}')"


class RenamePlan(BaseModel):
    """All renames needed to remove duplicate numbers from one directory."""

    directory: Path
    operations: list[RenameOp] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.operations)

    @property
    def is_empty(self) -> bool:
        return not self.operations

    def target_numbers(self) -> list[int]:
        return [op.new_number for op in self.operations]


class RenameFailure(BaseModel):
    """A planned rename that could not be applied."""

    operation: RenameOp
    error: str


class RenumberResult(BaseModel):
    """Outcome of renumbering a whole tree."""

    directories_visited: int = 0
    plans: list[RenamePlan] = Field(default_factory=list)
    applied: list[RenameOp] = Field(default_factory=list)
    failures: list[RenameFailure] = Field(default_factory=list)

    @property
    def operations(self) -> list[RenameOp]:
        """Every planned operation across all directories."""
        return [op for plan in self.plans for op in plan.operations]

    @property
    def total_count(self) -> int:
        return len(self.operations)

    @property
    def applied_count(self) -> int:
        return len(self.applied)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    def summary(self) -> str:
        """Return a human-readable summary of the run."""
        lines = [
            "Renumber Summary:",
            f"  Directories visited: {self.directories_visited}",
            f"  Planned renames: {self.total_count}",
            f"  Applied: {self.applied_count}",
            f"  Failed: {self.failed_count}",
        ]
        return "\n".join(lines)
