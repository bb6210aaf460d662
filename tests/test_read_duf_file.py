# -*- coding: utf-8 -*-
import gzip

import pytest

from morph_export_errors import DecompressionError, EncodingError, FileAccessError, FormatError
from read_duf_file import decode_dson, decompress_duf, is_duf_path, read_duf_text


class TestExtension:
    def test_duf_accepted(self):
        assert is_duf_path("scene.duf")
        assert is_duf_path("D:/Scenes/Victoria 8.DUF")

    def test_other_extensions_rejected(self):
        assert not is_duf_path("scene.dsf")
        assert not is_duf_path("scene.duf.gz")
        assert not is_duf_path("scene")

    def test_wrong_extension_raises_before_reading(self, tmp_path):
        # file does not exist: the extension check must fire first
        with pytest.raises(FormatError):
            read_duf_text(tmp_path / "missing.json")


class TestDecompress:
    def test_roundtrip_text(self, write_duf):
        path = write_duf('{"scene": {}}')
        assert read_duf_text(path) == '{"scene": {}}'

    def test_uppercase_extension(self, write_duf):
        path = write_duf('{"scene": {}}', name="SCENE.DUF")
        assert read_duf_text(path) == '{"scene": {}}'

    def test_multi_member_gzip(self):
        data = gzip.compress(b'{"a":') + gzip.compress(b" 1}")
        assert decompress_duf(data) == b'{"a": 1}'

    def test_plain_text_is_not_gzip(self, tmp_path):
        path = tmp_path / "plain.duf"
        path.write_text('{"scene": {}}', encoding="utf-8")
        with pytest.raises(DecompressionError):
            read_duf_text(path)

    def test_truncated_stream(self):
        data = gzip.compress(b'{"scene": {"nodes": []}}' * 50)
        with pytest.raises(DecompressionError):
            decompress_duf(data[: len(data) // 2])

    def test_corrupt_deflate_data(self):
        data = bytearray(gzip.compress(b"x" * 200))
        data[12:20] = b"\xff" * 8
        with pytest.raises(DecompressionError):
            decompress_duf(bytes(data))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError):
            read_duf_text(tmp_path / "nope.duf")


class TestDecode:
    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.duf"
        path.write_bytes(gzip.compress("{\"name\": \"Zoë\"}".encode("latin-1")))
        with pytest.raises(EncodingError):
            read_duf_text(path)

    def test_bom_dropped(self):
        assert decode_dson(b"\xef\xbb\xbf{}") == "{}"

    def test_non_ascii_kept(self):
        assert decode_dson("Zoë".encode("utf-8")) == "Zoë"


class TestDumpCommand:
    def test_dump_to_stdout(self, write_duf, capsys):
        from read_duf_file import main

        assert main([str(write_duf('{"scene": {}}'))]) == 0
        assert '{"scene": {}}' in capsys.readouterr().out

    def test_dump_to_file(self, write_duf, tmp_path, capsys):
        from read_duf_file import main

        out = tmp_path / "dump" / "scene.dson"
        assert main([str(write_duf('{"scene": {"nodes": []}}')), "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == '{"scene": {"nodes": []}}'
        assert "Wrote:" in capsys.readouterr().out

    def test_dump_bad_file_exits(self, tmp_path):
        from read_duf_file import main

        with pytest.raises(SystemExit, match="Error reading .duf file"):
            main([str(tmp_path / "scene.json")])
