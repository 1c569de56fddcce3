"""Cloud Spanner implementation of Destination."""

import logging
from typing import Sequence

from google.cloud import spanner

from csvloader.destination.service import Destination, Mutation, group_mutations

logger = logging.getLogger(__name__)


class SpannerDestination(Destination):
    """Cloud Spanner backend using google-cloud-spanner.

    apply() writes every mutation through a single ``database.batch()``,
    which Spanner commits atomically. Credentials come from Application
    Default Credentials.
    """

    def __init__(self, project_id: str, instance_id: str, database_id: str):
        self._project_id = project_id
        self._instance_id = instance_id
        self._database_id = database_id
        self._client = None
        self._database = None

    @property
    def database_path(self) -> str:
        return (
            f"projects/{self._project_id}/instances/{self._instance_id}"
            f"/databases/{self._database_id}"
        )

    def connect(self) -> None:
        self._client = spanner.Client(project=self._project_id)
        self._database = self._client.instance(self._instance_id).database(self._database_id)
        logger.info("Connected to %s", self.database_path)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._database = None

    def apply(self, mutations: Sequence[Mutation]) -> None:
        if self._database is None:
            raise RuntimeError("Not connected. Call connect() or use the destination as a context manager.")
        # Mutations are buffered client side and committed when the block exits.
        with self._database.batch() as batch:
            for table, columns, rows in group_mutations(mutations):
                batch.insert_or_update(table=table, columns=columns, values=rows)
                logger.debug("Buffered %d mutations for %s", len(rows), table)
