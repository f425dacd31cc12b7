class ConformanceError(Exception):
    pass


class CatalogError(ConformanceError):
    pass


class OrchestratorStateError(ConformanceError):
    pass


class RunPropertiesError(ConformanceError):
    pass


class ContainerError(ConformanceError):
    pass


class ContainerOpenError(ContainerError):
    pass


class TableNotFoundError(ContainerError):
    def __init__(self, table_name: str) -> None:
        super().__init__(f"Table or view not found: {table_name}")
        self.table_name = table_name


class ContainerReadError(ContainerError):
    pass
