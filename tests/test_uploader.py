"""Tests for the upload workflow and CLI in image_uploader/main.py."""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add parent dir to path so image_uploader is importable as a package
sys.path.insert(0, str(Path(__file__).parent.parent))

from image_uploader import main as main_module
from image_uploader.config import LOG_FILE_ENV_VAR, Config
from image_uploader.errors import InvalidInputPath, UploadFailed
from image_uploader.main import ImageUploader, main
from image_uploader.models import UploadResult


BASE_URL = "https://cdn.example.com"
NOW = datetime(2024, 3, 7, 9, 15)


class FakeUploadClient:
    """Records calls and returns canned results instead of touching the network."""

    def __init__(self, error: Exception | None = None, returned_key: str | None = None) -> None:
        self.error = error
        self.returned_key = returned_key
        self.signed = []
        self.uploads = []

    def sign_and_prepare(self, credentials, bucket, token_ttl):
        self.signed.append((credentials, bucket, token_ttl))
        return "handle"

    def upload(self, handle, local_path, object_key, display_name):
        self.uploads.append((handle, local_path, object_key, display_name))
        if self.error is not None:
            raise self.error
        return UploadResult(key=self.returned_key or object_key)


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(b"\x89PNG fake image")
    return path


@pytest.fixture
def log():
    return logging.getLogger("tests.uploader")


def make_config(**kwargs) -> Config:
    return Config(
        access_key="ak",
        secret_key="sk",
        bucket_name="images",
        base_url=BASE_URL,
        **kwargs,
    )


class TestImageUploader:
    """Tests for ImageUploader.run()."""

    def test_success_prints_url_last(self, image_file, log, capsys):
        client = FakeUploadClient()
        url = ImageUploader(make_config(), client, log).run(image_file, NOW)

        assert url == f"{BASE_URL}/image/2024/03/07/photo.png"
        lines = capsys.readouterr().out.splitlines()
        assert lines[-1] == url
        assert "image/2024/03/07/photo.png" in lines[0]

    def test_client_receives_credentials_and_ttl(self, image_file, log):
        client = FakeUploadClient()
        ImageUploader(make_config(), client, log).run(image_file, NOW)

        credentials, bucket, ttl = client.signed[0]
        assert (credentials.access_key, credentials.secret_key) == ("ak", "sk")
        assert bucket == "images"
        assert ttl == 3600
        _, local_path, key, display_name = client.uploads[0]
        assert local_path == image_file
        assert key == "image/2024/03/07/photo.png"
        assert display_name == "photo.png"

    def test_url_uses_returned_key(self, image_file, log):
        """The provider's key, not the requested one, forms the URL."""
        client = FakeUploadClient(returned_key="image/2024/03/07/renamed.png")
        url = ImageUploader(make_config(), client, log).run(image_file, NOW)
        assert url == f"{BASE_URL}/image/2024/03/07/renamed.png"

    def test_backup_copy(self, image_file, tmp_path, log):
        backup_dir = tmp_path / "backup"
        backup_dir.mkdir()
        uploader = ImageUploader(make_config(base_dir=str(backup_dir)), FakeUploadClient(), log)

        uploader.run(image_file, NOW)

        assert (backup_dir / "photo.png").read_bytes() == image_file.read_bytes()

    def test_backup_path_only_when_base_dir_set(self, image_file, tmp_path, log):
        """prepare() should derive a backup path only for a configured base_dir."""
        client = FakeUploadClient()
        assert ImageUploader(make_config(), client, log).prepare(image_file, NOW).backup_path is None
        assert ImageUploader(make_config(base_dir=""), client, log).prepare(image_file, NOW).backup_path is None

        request = ImageUploader(make_config(base_dir=str(tmp_path)), client, log).prepare(image_file, NOW)
        assert request.backup_path == tmp_path / "photo.png"

    def test_backup_failure_still_reports_url(self, image_file, tmp_path, log, capsys):
        config = make_config(base_dir=str(tmp_path / "missing"))
        url = ImageUploader(config, FakeUploadClient(), log).run(image_file, NOW)

        assert capsys.readouterr().out.splitlines()[-1] == url

    def test_upload_failure_propagates(self, image_file, tmp_path, log, capsys):
        """A failed upload aborts before any URL or backup."""
        backup_dir = tmp_path / "backup"
        backup_dir.mkdir()
        client = FakeUploadClient(error=UploadFailed("Failed to upload file: 401"))
        uploader = ImageUploader(make_config(base_dir=str(backup_dir)), client, log)

        with pytest.raises(UploadFailed):
            uploader.run(image_file, NOW)

        assert BASE_URL not in capsys.readouterr().out
        assert not (backup_dir / "photo.png").exists()

    def test_missing_file_rejected(self, tmp_path, log):
        client = FakeUploadClient()
        with pytest.raises(InvalidInputPath, match="is not a file"):
            ImageUploader(make_config(), client, log).run(tmp_path / "nope.png", NOW)
        assert client.signed == []

    def test_directory_rejected(self, tmp_path, log):
        client = FakeUploadClient()
        with pytest.raises(InvalidInputPath):
            ImageUploader(make_config(), client, log).run(tmp_path, NOW)
        assert client.uploads == []


class TestMain:
    """End-to-end tests for main() with a fake upload client."""

    @pytest.fixture
    def log_file(self, tmp_path, monkeypatch):
        path = tmp_path / "log.log"
        monkeypatch.setenv(LOG_FILE_ENV_VAR, str(path))
        return path

    @pytest.fixture
    def client(self, monkeypatch):
        fake = FakeUploadClient()
        monkeypatch.setattr(main_module, "create_upload_client", lambda config: fake)
        return fake

    @pytest.fixture
    def config_file(self, tmp_path):
        def _write(**extra) -> Path:
            path = tmp_path / "config.json"
            data = {
                "access_key": "ak",
                "secret_key": "sk",
                "bucket_name": "images",
                "base_url": BASE_URL,
                **extra,
            }
            path.write_text(json.dumps(data), encoding="utf-8")
            return path

        return _write

    def test_success(self, image_file, config_file, log_file, client, capsys):
        code = main([str(image_file), "--config", str(config_file())])

        assert code == 0
        today = datetime.now()
        expected = f"{BASE_URL}/image/{today.year}/{today.month:02d}/{today.day:02d}/photo.png"
        assert capsys.readouterr().out.splitlines()[-1] == expected
        assert expected in log_file.read_text(encoding="utf-8")

    def test_missing_argument(self, log_file, client, capsys):
        """No argument is a usage error with no upload attempted."""
        code = main([])

        assert code != 0
        captured = capsys.readouterr()
        assert "usage" in captured.err
        assert captured.out == ""
        assert client.signed == []

    def test_not_a_file(self, tmp_path, config_file, log_file, client, capsys):
        code = main([str(tmp_path / "nope.png"), "--config", str(config_file())])

        assert code != 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "is not a file" in captured.err
        assert client.uploads == []

    def test_directory_argument(self, tmp_path, config_file, log_file, client, capsys):
        code = main([str(tmp_path), "--config", str(config_file())])
        assert code != 0
        assert capsys.readouterr().out == ""

    def test_config_error(self, image_file, config_file, log_file, client, capsys):
        code = main([str(image_file), "--config", str(config_file(bucket_name=""))])

        assert code != 0
        assert "Bucket name cannot be empty" in capsys.readouterr().err
        log_text = log_file.read_text(encoding="utf-8")
        assert "Failed: Bucket name cannot be empty" in log_text
        assert "Upload failed" not in log_text
        assert client.signed == []

    def test_missing_config(self, image_file, tmp_path, log_file, client):
        assert main([str(image_file), "--config", str(tmp_path / "absent.json")]) != 0

    def test_upload_failure(self, image_file, config_file, log_file, client, capsys):
        client.error = UploadFailed("Failed to upload file: 401")

        code = main([str(image_file), "--config", str(config_file())])

        assert code != 0
        assert BASE_URL not in capsys.readouterr().out
        assert "Upload failed" in log_file.read_text(encoding="utf-8")

    def test_backup_failure_exits_zero(self, image_file, tmp_path, config_file, log_file, client, capsys):
        """A broken backup directory never changes the exit code."""
        config = config_file(base_dir=str(tmp_path / "missing"))

        code = main([str(image_file), "--config", str(config)])

        assert code == 0
        assert capsys.readouterr().out.splitlines()[-1].startswith(f"{BASE_URL}/image/")
        assert "Local backup failed" in log_file.read_text(encoding="utf-8")

    def test_empty_argument_is_not_a_file(self, config_file, log_file, client, capsys):
        """An empty path is an invalid input path, not a missing argument."""
        code = main(["", "--config", str(config_file())])

        assert code == 1
        captured = capsys.readouterr()
        assert "is not a file" in captured.err
        assert captured.out == ""
        assert client.uploads == []

    def test_invalid_s3_endpoint(self, image_file, config_file, log_file, capsys):
        """A malformed endpoint fails cleanly instead of escaping main()."""
        config = config_file(provider="s3", endpoint="minio:9000")

        code = main([str(image_file), "--config", str(config)])

        assert code == 1
        captured = capsys.readouterr()
        assert "Error:" in captured.err
        assert BASE_URL not in captured.out
        assert "Upload failed" in log_file.read_text(encoding="utf-8")
