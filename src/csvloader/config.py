"""Run configuration and its validation."""

from argparse import Namespace
from dataclasses import dataclass

from csvloader.errors import ConfigurationError
from csvloader.reader import ReaderOptions, resolve_delimiter
from csvloader.source import GCS_SOURCE, SourceLocation


@dataclass(frozen=True)
class LoadConfig:
    """Settings for one load run.

    ``source`` is ``gcs`` to read ``bucket``/``path`` from Cloud Storage;
    any other value is a local file path. ``db_url`` selects a SQLite or
    PostgreSQL destination in place of the Spanner identifiers.
    """

    source: str = GCS_SOURCE
    bucket: str = ""
    path: str = ""
    spanner_project_id: str = ""
    spanner_instance_id: str = ""
    spanner_database_id: str = ""
    spanner_table: str = ""
    delimiter: str = "comma"
    lazy_quotes: bool = True
    trim_leading_space: bool = True
    db_url: str = ""

    @classmethod
    def from_args(cls, args: Namespace) -> "LoadConfig":
        return cls(
            source=args.source,
            bucket=args.bucket,
            path=args.path,
            spanner_project_id=args.spanner_project_id,
            spanner_instance_id=args.spanner_instance_id,
            spanner_database_id=args.spanner_database_id,
            spanner_table=args.spanner_table,
            delimiter=args.delimiter,
            lazy_quotes=args.lazyquotes,
            trim_leading_space=args.trimleadingspace,
            db_url=args.db_url,
        )

    def validate(self) -> tuple[SourceLocation, ReaderOptions]:
        """Check every setting without touching the source or the destination.

        Checks run in a fixed order and the first failure raises
        ConfigurationError with a message naming the missing flag.
        """
        if not self.source:
            raise ConfigurationError("source is not set")
        if not self.db_url:
            if not self.spanner_project_id:
                raise ConfigurationError("spanner-project-id is not set")
            if not self.spanner_instance_id:
                raise ConfigurationError("spanner-instance-id is not set")
            if not self.spanner_database_id:
                raise ConfigurationError("spanner-database-id is not set")
        if not self.spanner_table:
            raise ConfigurationError("spanner-table is not set")

        options = ReaderOptions(
            delimiter=resolve_delimiter(self.delimiter),
            lazy_quotes=self.lazy_quotes,
            trim_leading_space=self.trim_leading_space,
        )

        if self.source == GCS_SOURCE:
            if not self.bucket:
                raise ConfigurationError("bucket is not set")
            if not self.path:
                raise ConfigurationError("path is not set")
            location = SourceLocation.gcs(self.bucket, self.path)
        else:
            location = SourceLocation.local(self.source)
        return location, options
