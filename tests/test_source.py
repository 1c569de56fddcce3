"""Tests for the source stream provider."""

import io

import pytest

from csvloader import source
from csvloader.errors import StreamAcquisitionError
from csvloader.source import SourceLocation, open_source


class TestOpenSource:
    def test_local_file(self, tmp_path):
        path = tmp_path / "in.csv"
        path.write_bytes(b"a\n")
        with open_source(SourceLocation.local(str(path))) as stream:
            assert stream.read() == b"a\n"
        assert stream.closed

    def test_closed_on_error(self, tmp_path):
        path = tmp_path / "in.csv"
        path.write_bytes(b"a\n")
        with pytest.raises(ValueError):
            with open_source(SourceLocation.local(str(path))) as stream:
                raise ValueError("downstream failure")
        assert stream.closed

    def test_missing_local_file(self, tmp_path):
        with pytest.raises(StreamAcquisitionError, match="open source: cannot open"):
            with open_source(SourceLocation.local(str(tmp_path / "missing.csv"))):
                pass

    def test_gcs_object(self, monkeypatch):
        protocols = []

        class FakeFS:
            def open(self, path, mode):
                assert path == "bucket/obj.csv"
                return io.BytesIO(b"x\n")

        def filesystem(protocol):
            protocols.append(protocol)
            return FakeFS()

        monkeypatch.setattr(source.fsspec, "filesystem", filesystem)
        with open_source(SourceLocation.gcs("bucket", "obj.csv")) as stream:
            assert stream.read() == b"x\n"
        assert protocols == ["gcs"]

    def test_gcs_missing_object(self, monkeypatch):
        class FakeFS:
            def open(self, path, mode):
                raise FileNotFoundError(path)

        monkeypatch.setattr(source.fsspec, "filesystem", lambda protocol: FakeFS())
        with pytest.raises(StreamAcquisitionError, match="gcs://bucket/obj.csv"):
            with open_source(SourceLocation.gcs("bucket", "obj.csv")):
                pass
