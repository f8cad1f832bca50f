from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def migration_map(*entries: tuple[str, str, str], name: str | None = None) -> str:
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<migrationMap>"]
    for old_name, new_name, kind in entries:
        lines.append(
            f'  <entry oldName="{old_name}" newName="{new_name}" type="{kind}"/>'
        )
    if name is not None:
        lines.append(f'  <name value="{name}"/>')
    lines.append("</migrationMap>")
    return "\n".join(lines) + "\n"


class RecordingReporter:
    """Collect conversion outcomes instead of logging them."""

    def __init__(self) -> None:
        self.converted_files: list[tuple[Path, Path]] = []
        self.skipped_files: list[tuple[Path, str]] = []
        self.failed_files: list[tuple[Path, BaseException]] = []

    def converted(self, source: Path, destination: Path) -> None:
        self.converted_files.append((source, destination))

    def skipped(self, source: Path, reason: str) -> None:
        self.skipped_files.append((source, reason))

    def failed(self, source: Path, error: BaseException) -> None:
        self.failed_files.append((source, error))


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    path = tmp_path / "input"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "output"


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
