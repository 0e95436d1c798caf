from pathlib import Path


class FreenetTrayError(Exception):
    pass


class MigrationError(FreenetTrayError):
    """Ein Altbestand (z.B. der alte LaunchAgent) konnte nicht entfernt werden."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Migration fehlgeschlagen für {path}: {reason}")
        self.path = path
        self.reason = reason
