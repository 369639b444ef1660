import io
from pathlib import Path

import pytest

from pakreader.errors import InvalidMagic, UnsupportedVersion, FormatError
from pakreader.localization import MetaHeader, load_locmeta, read_locmeta
from locres_builder import build_locmeta, build_locres


def test_locmeta_reads_culture_and_resource_name():
    meta = read_locmeta(io.BytesIO(build_locmeta("en", "Game.locres")))
    assert meta == MetaHeader(native_culture="en", native_locres="Game.locres")


def test_locmeta_rejects_wrong_magic_without_fallback():
    data = build_locmeta("en", "Game.locres", magic=b"\x00" * 16)
    with pytest.raises(InvalidMagic):
        read_locmeta(io.BytesIO(data))


def test_locres_file_is_not_a_locmeta_file():
    with pytest.raises(InvalidMagic):
        read_locmeta(io.BytesIO(build_locres([("A", [("k", "v")])], 2)))


def test_locmeta_version_above_latest():
    data = build_locmeta("en", "Game.locres", version=1)
    with pytest.raises(UnsupportedVersion) as exc:
        read_locmeta(io.BytesIO(data))
    assert exc.value.context == {"file_version": 1, "loader_version": 0}


def test_locmeta_truncated_strings():
    data = build_locmeta("en-US", "Game.locres")
    with pytest.raises(FormatError):
        read_locmeta(io.BytesIO(data[:-4]))


def test_locmeta_empty_stream_is_invalid_magic():
    with pytest.raises(InvalidMagic):
        read_locmeta(io.BytesIO(b""))


def test_load_locmeta_from_path(tmp_path: Path):
    p = tmp_path / "Game.locmeta"
    p.write_bytes(build_locmeta("fr", "Game.locres"))
    assert load_locmeta(p).native_culture == "fr"


def test_locmeta_strings_get_trailing_nul_trimmed():
    meta = read_locmeta(io.BytesIO(build_locmeta("en\x00", "Game.locres\x00")))
    assert meta.native_culture == "en"
    assert meta.native_locres == "Game.locres"
