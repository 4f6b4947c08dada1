import io
from unittest.mock import patch

import pytest

from config import crypto_config
from initialize_ipcrypt import build_parser, main


HEX_KEY = b"some 16-byte key".hex()


def test_encrypt_addresses(capsys):
    """Each address is printed encrypted on its own line."""
    code = main(["--key", HEX_KEY, "encrypt", "127.0.0.1", "8.8.8.8"])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["114.62.227.59", "46.48.51.50"]


def test_decrypt_addresses(capsys):
    code = main(["--key", "some 16-byte key", "decrypt", "171.238.15.199"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "1.2.3.4"


def test_encrypt_integers(capsys):
    """--int accepts decimal and hex integers."""
    code = main(["--key", HEX_KEY, "encrypt", "--int", "2130706433", "0x7f000001"])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["1916724027", "1916724027"]


def test_key_from_environment(monkeypatch, capsys):
    """Without --key the IPCRYPT_KEY value is used."""
    monkeypatch.setattr(crypto_config, "IPCRYPT_KEY", HEX_KEY)
    assert main(["encrypt", "127.0.0.1"]) == 0
    assert capsys.readouterr().out.strip() == "114.62.227.59"


def test_missing_key_exits_with_error(monkeypatch, capsys):
    """A missing key is reported on stderr with exit code 1."""
    monkeypatch.setattr(crypto_config, "IPCRYPT_KEY", None)
    with patch("initialize_ipcrypt.logger") as mock_logger:
        assert main(["encrypt", "127.0.0.1"]) == 1
    assert "IPCRYPT_KEY not found" in capsys.readouterr().err
    mock_logger.error.assert_called_once()


def test_invalid_address_exits_with_error(capsys):
    assert main(["--key", HEX_KEY, "encrypt", "300.1.1.1"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_invalid_key_exits_with_error(capsys):
    assert main(["--key", "short", "encrypt", "1.1.1.1"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_anonymize_stdin_to_stdout(monkeypatch, capsys):
    """Text streamed through stdin comes out anonymized."""
    monkeypatch.setattr("sys.stdin", io.StringIO("from 127.0.0.1\nno address\n"))
    assert main(["--key", HEX_KEY, "anonymize"]) == 0
    assert capsys.readouterr().out == "from 114.62.227.59\nno address\n"


def test_anonymize_files(tmp_path):
    """With --input and --output the file helper does the work."""
    src = tmp_path / "in.log"
    dst = tmp_path / "out.log"
    src.write_text("46.48.51.50 connected\n")

    assert main(["--key", HEX_KEY, "anonymize", "--decrypt", "--input", str(src), "--output", str(dst)]) == 0
    assert dst.read_text() == "8.8.8.8 connected\n"


def test_anonymize_input_file_to_stdout(tmp_path, capsys):
    src = tmp_path / "in.log"
    src.write_text("8.8.8.8\n")
    assert main(["--key", HEX_KEY, "anonymize", "--input", str(src)]) == 0
    assert capsys.readouterr().out == "46.48.51.50\n"


def test_anonymize_missing_input_file(tmp_path, capsys):
    assert main(["--key", HEX_KEY, "anonymize", "--input", str(tmp_path / "nope.log")]) == 1


def test_keygen(capsys):
    """keygen prints 32 hex digits and needs no key."""
    assert main(["keygen"]) == 0
    out = capsys.readouterr().out.strip()
    assert len(out) == 32
    int(out, 16)


def test_differential(capsys):
    assert main(["--key", HEX_KEY, "differential", "--samples", "100", "--seed", "5"]) == 0
    assert "/100 = " in capsys.readouterr().out


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_anonymize_stdin_passes_undecodable_bytes(monkeypatch):
    """Non-UTF-8 bytes on stdin are written to stdout unchanged."""
    fake_stdin = io.TextIOWrapper(io.BytesIO(b"8.8.8.8 \xff\n"), encoding="utf-8")
    fake_stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    monkeypatch.setattr("sys.stdin", fake_stdin)
    monkeypatch.setattr("sys.stdout", fake_stdout)

    assert main(["--key", HEX_KEY, "anonymize"]) == 0

    fake_stdout.flush()
    assert fake_stdout.buffer.getvalue() == b"46.48.51.50 \xff\n"


def test_anonymize_in_place(tmp_path):
    """--input and --output may name the same file."""
    path = tmp_path / "app.log"
    path.write_text("8.8.8.8 up\n")
    assert main(["--key", HEX_KEY, "anonymize", "--input", str(path), "--output", str(path)]) == 0
    assert path.read_text() == "46.48.51.50 up\n"


def test_anonymize_unwritable_output(tmp_path):
    """An --output in a missing directory fails with exit code 1 and leaves the input alone."""
    src = tmp_path / "in.log"
    src.write_text("8.8.8.8\n")

    code = main(["--key", HEX_KEY, "anonymize", "--input", str(src), "--output", str(tmp_path / "missing" / "out.log")])

    assert code == 1
    assert src.read_text() == "8.8.8.8\n"
    assert [p.name for p in tmp_path.iterdir()] == ["in.log"]
