#!/usr/bin/env python3
"""
Export Integrations

Third-party destinations for exports. None of them talk to a real service:
connecting flips a persisted flag, and syncing runs a recorded export whose
destination label names the integration. The RemoteSink protocol is the seam
where a real integration would plug in.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Union

from ..core.errors import IntegrationNotConnectedError, ValidationError
from ..core.models import Expense
from .generators import ExportFormat
from .history import ExportHistoryEntry

if TYPE_CHECKING:
    from .datastore import IntegrationStateStore
    from .engine import ExportEngine

logger = logging.getLogger(__name__)

LOCAL_DESTINATION = "local"
LOCAL_DESTINATION_LABEL = "Local Download"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Integration:
    """A destination service an export can be synced to."""

    id: str
    name: str
    description: str
    always_connected: bool = False


INTEGRATIONS: tuple[Integration, ...] = (
    Integration("google-sheets", "Google Sheets", "Sync expenses to a spreadsheet automatically"),
    Integration("dropbox", "Dropbox", "Auto-backup exports to your Dropbox"),
    Integration("onedrive", "OneDrive", "Save exports directly to OneDrive"),
    Integration("notion", "Notion", "Create expense databases in Notion"),
    Integration("email", "Email", "Send exports directly to any email", always_connected=True),
)

_INTEGRATIONS_BY_ID = {i.id: i for i in INTEGRATIONS}


def get_integration(integration_id: str) -> Integration:
    """
    Look up an integration.

    Raises:
        ValidationError: If the id is not a known integration
    """
    try:
        return _INTEGRATIONS_BY_ID[integration_id]
    except KeyError:
        raise ValidationError(f"Unknown integration: {integration_id}", field="integration") from None


def destination_label(destination: str) -> str:
    """Human-readable history label for a backup destination."""
    if destination == LOCAL_DESTINATION:
        return LOCAL_DESTINATION_LABEL
    return get_integration(destination).name


class RemoteSink(Protocol):
    """A destination that exports can be pushed to."""

    @property
    def connected(self) -> bool: ...

    def connect(self) -> None: ...

    def disconnect(self) -> None: ...

    def sync(
        self, expenses: Sequence[Expense], export_format: Union[str, ExportFormat]
    ) -> ExportHistoryEntry: ...


class SimulatedSink:
    """
    RemoteSink that only records connection state and history.

    Connection flags persist through the integration state store so they
    survive restarts.
    """

    def __init__(self, integration: Integration, states: "IntegrationStateStore", engine: "ExportEngine"):
        self.integration = integration
        self.states = states
        self.engine = engine

    @property
    def connected(self) -> bool:
        if self.integration.always_connected:
            return True
        return self.states.load().get(self.integration.id, False)

    def _set_connected(self, connected: bool) -> None:
        def apply(states: dict[str, bool]) -> dict[str, bool]:
            return {**states, self.integration.id: connected}

        self.states.update(apply)

    def connect(self) -> None:
        self.engine.delay.wait()
        self._set_connected(True)
        logger.info("Connected integration %s", self.integration.id)

    def disconnect(self) -> None:
        if self.integration.always_connected:
            return
        self._set_connected(False)
        logger.info("Disconnected integration %s", self.integration.id)

    def sync(
        self, expenses: Sequence[Expense], export_format: Union[str, ExportFormat] = ExportFormat.CSV
    ) -> ExportHistoryEntry:
        """
        Export all expenses to this integration.

        Raises:
            IntegrationNotConnectedError: If the integration is not connected
        """
        if not self.connected:
            raise IntegrationNotConnectedError(self.integration.id)
        _, entry = self.engine.run_recorded_export(
            expenses,
            export_format,
            filename=f"expenses-{self.integration.id}",
            destination=self.integration.name,
        )
        return entry


class IntegrationHub:
    """Access to every registered integration's sink."""

    def __init__(self, states: "IntegrationStateStore", engine: "ExportEngine"):
        self.states = states
        self.engine = engine

    def sink(self, integration_id: str) -> SimulatedSink:
        return SimulatedSink(get_integration(integration_id), self.states, self.engine)

    def status(self) -> list[tuple[Integration, bool]]:
        """Every integration with its connection flag."""
        return [(i, self.sink(i.id).connected) for i in INTEGRATIONS]


def send_email(
    engine: "ExportEngine",
    expenses: Sequence[Expense],
    recipient: str,
    export_format: Union[str, ExportFormat] = ExportFormat.PDF,
    filename: str = "",
) -> ExportHistoryEntry:
    """
    Export expenses "by email" to recipient.

    Raises:
        ValidationError: If recipient is not an email address
    """
    recipient = recipient.strip()
    if not EMAIL_PATTERN.match(recipient):
        raise ValidationError(f"Invalid email address: {recipient!r}", field="recipient")

    _, entry = engine.run_recorded_export(
        expenses,
        export_format,
        filename=filename,
        destination=f"Email: {recipient}",
    )
    return entry
