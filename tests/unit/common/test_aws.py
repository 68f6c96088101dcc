"""Tests for common.aws module."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from common.aws import build_s3_key, upload_jsonl_records_to_s3


@dataclass
class SampleRecord:
    name: str
    created_at: datetime


class TestBuildS3Key:
    def test_partitioned_key(self) -> None:
        ts = datetime(2024, 3, 5, tzinfo=timezone.utc)
        key = build_s3_key("breaking_clusters", ts, "file.jsonl")
        assert key == "breaking_clusters/year=2024/month=03/day=05/file.jsonl"


class TestUploadJsonlRecordsToS3:
    @patch.dict("os.environ", {"S3_BUCKET_NAME": "test-bucket"})
    @patch("common.aws.get_s3_client")
    def test_uploads_serialized_records(self, mock_get_client) -> None:
        mock_s3 = MagicMock()
        mock_get_client.return_value = mock_s3
        records = [SampleRecord(name="a", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))]

        key = upload_jsonl_records_to_s3(records, "breaking_decisions")

        assert key.startswith("breaking_decisions/year=")
        kwargs = mock_s3.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "test-bucket"
        assert kwargs["Key"] == key
        body = kwargs["Body"].decode("utf-8").strip()
        assert json.loads(body) == {"name": "a", "created_at": "2024-01-01T00:00:00+00:00"}
