from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ColumnInfo:
    """One row of container column introspection."""

    name: str
    declared_type: str
    not_null: bool
    has_default: bool = False


@dataclass(frozen=True, slots=True)
class ExpectedColumn:
    name: str
    declared_type: str
    not_null: bool
    has_default: bool | None = None

    def describe(self) -> str:
        nullability = "not-null" if self.not_null else "nullable"
        return f"{self.name}: {self.declared_type} {nullability}"


@dataclass(frozen=True, slots=True)
class ExpectedColumnSchema:
    table_name: str
    columns: tuple[ExpectedColumn, ...]

    def __post_init__(self) -> None:
        names = [column.name for column in self.columns]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate expected column in {self.table_name}")

    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)
