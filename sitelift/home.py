from typing import Protocol


class Home(Protocol):
    """Storage interface for published infrastructure outputs. Dumb I/O, no domain logic."""

    # Params (SSM in AWS)
    def read_param(self, name: str) -> str | None: ...
