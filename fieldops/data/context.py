from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

import pandas as pd

from .source import RecordSource
from ..config import DEFAULTS, TableDefaults
from ..table.editable_table import EditableTable
from ..table.sinks import LoggingSaveSink, SaveSink
from ..time.edit_window import EditWindowPolicy


@dataclass(frozen=True)
class Client:
    id: str
    name: str
    allowed_edit_days: int = DEFAULTS.allowed_edit_days


@dataclass(frozen=True)
class Site:
    id: str
    name: str
    client_id: str


@dataclass
class SiteContext:
    """Single owner of the selected client and site.

    The selected client decides the edit window of every table opened
    through this context.
    """

    clients: Mapping[str, Client]
    sites: Mapping[str, Site]
    source: RecordSource
    defaults: TableDefaults = DEFAULTS
    selected_client: Optional[Client] = field(default=None, init=False)
    selected_site: Optional[Site] = field(default=None, init=False)

    def select_client(self, client_id: Optional[str]) -> None:
        if client_id is None:
            self.selected_client = None
            self.selected_site = None
            return
        client = self.clients[client_id]
        if self.selected_site is not None and self.selected_site.client_id != client.id:
            self.selected_site = None
        self.selected_client = client

    def select_site(self, site_id: Optional[str]) -> None:
        if site_id is None:
            self.selected_site = None
            return
        site = self.sites[site_id]
        if self.selected_client is None:
            self.selected_client = self.clients[site.client_id]
        elif site.client_id != self.selected_client.id:
            raise ValueError(
                f"Site {site.id!r} does not belong to client {self.selected_client.id!r}"
            )
        self.selected_site = site

    def sites_for_client(self) -> list[Site]:
        if self.selected_client is None:
            return []
        return [s for s in self.sites.values() if s.client_id == self.selected_client.id]

    def allowed_edit_days(self) -> int:
        if self.selected_client is None:
            return self.defaults.allowed_edit_days
        return self.selected_client.allowed_edit_days

    def open_table(
        self,
        table: str,
        sink: Optional[SaveSink] = None,
        clock: Callable[[], pd.Timestamp] = pd.Timestamp.now,
    ) -> EditableTable:
        if self.selected_site is None:
            raise ValueError("Select a site before opening a table.")
        schema = self.source.schemas()[table]
        records = self.source.fetch(table, self.selected_site.id)
        return EditableTable(
            schema=schema,
            records=records,
            policy=EditWindowPolicy(self.allowed_edit_days()),
            sink=sink if sink is not None else LoggingSaveSink(),
            clock=clock,
            page_size=self.defaults.page_size,
        )
