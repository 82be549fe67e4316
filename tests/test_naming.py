import re

from mediahub_backend.app import naming
from mediahub_backend.app.naming import generate_storage_name

HEX_NAME = re.compile(r"^[0-9a-f]{32}")


def test_name_is_32_hex_chars_plus_extension():
    name = generate_storage_name("photo.jpg")
    assert re.fullmatch(r"[0-9a-f]{32}\.jpg", name), name


def test_extension_kept_verbatim():
    assert generate_storage_name("Clip.MOV").endswith(".MOV")
    # only the last suffix counts as the extension
    assert generate_storage_name("archive.tar.gz")[32:] == ".gz"


def test_no_extension_gives_bare_token():
    assert re.fullmatch(r"[0-9a-f]{32}", generate_storage_name("README"))
    assert re.fullmatch(r"[0-9a-f]{32}", generate_storage_name(".bashrc"))


def test_names_do_not_repeat():
    names = {generate_storage_name("photo.jpg") for _ in range(10_000)}
    assert len(names) == 10_000
    assert all(n.endswith(".jpg") and HEX_NAME.match(n) for n in names)


def test_token_comes_from_secrets(monkeypatch):
    calls = []

    def fake_token_hex(nbytes):
        calls.append(nbytes)
        return "ab" * nbytes

    monkeypatch.setattr(naming.secrets, "token_hex", fake_token_hex)
    assert generate_storage_name("a.png") == "ab" * 16 + ".png"
    assert calls == [16]
