from fieldops.data.schema import FieldDefinition, FieldType, TableSchema
from fieldops.data.source import InMemoryRecordSource
from fieldops.data.context import Client, Site

GENERATION = TableSchema(
    name="generation.meter_reading",
    fields=[
        FieldDefinition("date", "Date", FieldType.DATE, True),
        FieldDefinition("inverter1", "Inverter 1 (kWh)", FieldType.NUMBER, True),
        FieldDefinition("inverter2", "Inverter 2 (kWh)", FieldType.NUMBER, True),
        FieldDefinition("inverter3", "Inverter 3 (kWh)", FieldType.NUMBER, False),
        FieldDefinition("totalGeneration", "Total Generation (MWh)", FieldType.NUMBER, True),
        FieldDefinition("notes", "Notes", FieldType.TEXT, False),
    ],
)

GRASS_CUTTING = TableSchema(
    name="operations.grass_cutting",
    fields=[
        FieldDefinition("date", "Date", FieldType.DATE, True),
        FieldDefinition("block", "Block", FieldType.TEXT, True),
        FieldDefinition("inverter", "Inverter", FieldType.TEXT, True),
        FieldDefinition("scb", "SCB", FieldType.TEXT, False),
        FieldDefinition("numberOfStringsCleaned", "Strings Cleaned", FieldType.NUMBER, True),
        FieldDefinition("startTime", "Start Time", FieldType.TIME, True),
        FieldDefinition("stopTime", "Stop Time", FieldType.TIME, True),
        FieldDefinition("verifiedBy", "Verified By", FieldType.TEXT, True),
        FieldDefinition("planned", "Planned", FieldType.NUMBER, False),
        FieldDefinition("remarks", "Remarks", FieldType.TEXT, False),
    ],
)

CLEANING = TableSchema(
    name="operations.cleaning",
    fields=[
        FieldDefinition("date", "Date", FieldType.DATE, True),
        FieldDefinition("cleaningType", "Type", FieldType.TEXT, True),
        FieldDefinition("block", "Block", FieldType.TEXT, True),
        FieldDefinition("inverter", "Inverter", FieldType.TEXT, True),
        FieldDefinition("scbNumber", "SCB", FieldType.TEXT, True),
        FieldDefinition("modulesCleaned", "Modules Cleaned", FieldType.NUMBER, False),
        FieldDefinition("totalModules", "Total Modules", FieldType.NUMBER, False),
        FieldDefinition("waterConsumption", "Water (L)", FieldType.NUMBER, False),
        FieldDefinition("rainfall", "Rainfall", FieldType.NUMBER, False),
        FieldDefinition("remarks", "Remarks", FieldType.TEXT, False),
    ],
)

CLIENTS = {
    "1": Client("1", "Solar Energy Corp", allowed_edit_days=30),
    "2": Client("2", "Wind Power Solutions", allowed_edit_days=45),
    "3": Client("3", "Green Energy Partners", allowed_edit_days=15),
}

SITES = {
    "1": Site("1", "Desert Solar Farm A", client_id="1"),
    "2": Site("2", "Desert Solar Farm B", client_id="1"),
    "3": Site("3", "Mountain Wind Site", client_id="2"),
}

GENERATION_ROWS = [
    {"id": "g1", "date": "2025-08-10", "inverter1": 1250.5, "inverter2": 1180.2,
     "inverter3": 995.8, "totalGeneration": 3.426, "notes": "Clear weather conditions"},
    {"id": "g2", "date": "2025-08-09", "inverter1": 1180.3, "inverter2": 1095.7,
     "inverter3": 1020.1, "totalGeneration": 3.296, "notes": "Partly cloudy"},
    {"id": "g3", "date": "2025-07-28", "inverter1": 1302.0, "inverter2": 1254.4,
     "inverter3": None, "totalGeneration": 2.556, "notes": "Inverter 3 offline"},
]

GRASS_CUTTING_ROWS = [
    {"id": "gc1", "date": "2025-08-18", "block": "Block A1", "inverter": "INV-A1-001",
     "scb": "SCB-01", "numberOfStringsCleaned": 45, "startTime": "07:30",
     "stopTime": "11:00", "verifiedBy": "R. Kumar", "planned": 50, "remarks": ""},
    {"id": "gc2", "date": "2025-08-12", "block": "Block A2", "inverter": "INV-A2-001",
     "scb": None, "numberOfStringsCleaned": 60, "startTime": "08:00",
     "stopTime": "12:15", "verifiedBy": "S. Patel", "planned": 50, "remarks": "Extra crew"},
]

CLEANING_ROWS = [
    {"id": "c1", "date": "2025-08-15", "cleaningType": "Wet", "block": "Block A",
     "inverter": "INV001", "scbNumber": "SCB001", "modulesCleaned": 150,
     "totalModules": 300, "waterConsumption": 500, "rainfall": 2.5,
     "remarks": "Regular cleaning completed"},
    {"id": "c2", "date": "2025-08-14", "cleaningType": "Dry", "block": "Block A",
     "inverter": "INV002", "scbNumber": "SCB004", "modulesCleaned": 600,
     "totalModules": 300, "waterConsumption": None, "rainfall": 0,
     "remarks": "Double pass"},
]


def mock_source() -> InMemoryRecordSource:
    return InMemoryRecordSource(
        name="mock",
        schemas={
            GENERATION.name: GENERATION,
            GRASS_CUTTING.name: GRASS_CUTTING,
            CLEANING.name: CLEANING,
        },
        rows={
            (GENERATION.name, "1"): GENERATION_ROWS,
            (GRASS_CUTTING.name, "1"): GRASS_CUTTING_ROWS,
            (CLEANING.name, "1"): CLEANING_ROWS,
        },
    )
