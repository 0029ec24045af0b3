import logging

import pandas as pd

from fieldops.data.context import SiteContext
from fieldops.diagnostics.summary import cleaning_progress, completion_band
from fieldops.table.sinks import MemorySaveSink

from examples.mock_fixtures import CLEANING, CLIENTS, GENERATION, SITES, mock_source


def main():
    logging.basicConfig(level=logging.INFO)

    ctx = SiteContext(clients=CLIENTS, sites=SITES, source=mock_source())
    ctx.select_client("1")
    ctx.select_site("1")

    now = pd.Timestamp("2025-08-20 09:00")
    sink = MemorySaveSink()
    table = ctx.open_table(GENERATION.name, sink=sink, clock=lambda: now)

    print("Month options:", table.month_options())
    for r in table.rows():
        lock = " [locked]" if table.is_locked(r.record_id) else ""
        print(r.record_id, r.date.date(), dict(r.values), lock)

    table.begin_edit()
    table.edit_cell("g1", "notes", "Cleaned pyranometer")
    err = table.edit_cell("g2", "inverter1", "n/a")
    print("Cell error:", err)

    report = table.save()
    print("Committed:", dict(report.committed))
    print("Still staged:", table.buffer.pending())

    print(table.totals())
    print(table.export_csv("2025-08-01", "2025-08-31"))

    cleaning = ctx.open_table(CLEANING.name, sink=sink, clock=lambda: now)
    for r in cleaning.rows():
        p = cleaning_progress(
            r.values["modulesCleaned"], r.values["totalModules"], r.values["totalModules"]
        )
        print(r.record_id, f"{p.percent:.1f}%", completion_band(p.percent), p.uncleaned)


if __name__ == "__main__":
    main()
