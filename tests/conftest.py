from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


@pytest.fixture
def tmpdocs(tmp_path: Path):
    """Working directory with a letter template and a matching answer file."""
    write(
        tmp_path / "letter.txt",
        "Dear {{client_name}},\n[[IF is_urgent]]URGENT\n[[END IF]]Regards",
    )
    write(
        tmp_path / "answers.yaml",
        "client_name: Alice & Co\n"
        "is_urgent: true\n",
    )
    return tmp_path
