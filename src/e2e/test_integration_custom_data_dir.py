from pathlib import Path
import pytest
from singlish.engine import Engine
from singlish.loader import TableFormatError, build_tables

_FILES = {
    "vowels.tsv": "# latin\tindependent\tsign\tpriority\na\tඅ\t-\t0\naa\tආ\tා\t0\n",
    "consonants.tsv": "m\tම\t10\nk\tක\t10\n",
    "specials.tsv": "# none\n",
    "exceptions.tsv": "ok\tඔකේ\n",
    "foreign.txt": "\n",
    "units.tsv": "k\tක්\n",
    "vocabulary.txt": "mama\t5\n",
}


def _seed(tmp: Path, **overrides: str) -> str:
    root = tmp / "Rules"; root.mkdir()
    for name, body in {**_FILES, **overrides}.items():
        if body is not None:
            (root / name).write_text(body, encoding="utf-8")
    return str(root)


@pytest.mark.e2e
def test_engine_uses_tables_from_a_custom_folder(tmp_path: Path):
    eng = Engine()
    try:
        eng.build(_seed(tmp_path), fresh=True)
        assert eng.translate("mamaa kama ok") == "මමා කම ඔකේ"
        assert eng.translate("5k") == "5ක්"
        assert len(eng.tables.lexicon) == 1
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_bad_priority_reports_file_and_line(tmp_path: Path):
    root = _seed(tmp_path, **{"consonants.tsv": "# header\nm\tම\t10\nk\tක\tten\n"})
    with pytest.raises(TableFormatError) as ei:
        build_tables(root)
    assert ei.value.line_no == 3
    assert ei.value.path.endswith("consonants.tsv")


@pytest.mark.e2e
def test_wrong_column_count_is_rejected(tmp_path: Path):
    root = _seed(tmp_path, **{"vowels.tsv": "a\tඅ\t0\n"})
    with pytest.raises(TableFormatError):
        build_tables(root)


@pytest.mark.e2e
def test_missing_data_file(tmp_path: Path):
    root = _seed(tmp_path, **{"units.tsv": None})
    with pytest.raises(FileNotFoundError):
        build_tables(root)


@pytest.mark.e2e
def test_missing_folder(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        Engine().build(str(tmp_path / "nope"), fresh=True)


def test_engine_requires_build():
    eng = Engine()
    with pytest.raises(RuntimeError):
        eng.translate("mama")
    eng.build()
    eng.shutdown()
    with pytest.raises(RuntimeError):
        eng.new_session()
