"""Seed tables for state fuel prices and the station directory.

Prices are retail rupees per liter (May 2025). Reference centers are the
approximate geographic middle of each state and drive the nearest-state lookup.
Loaded into the database by ``manage.py load_reference_data``.
"""

from __future__ import annotations

STATE_FUEL_PRICES: tuple[dict, ...] = (
    {"state": "Andhra Pradesh", "petrol": 108.35, "diesel": 96.22, "center": (15.9129, 79.7400)},
    {"state": "Telangana", "petrol": 107.46, "diesel": 95.70, "center": (17.1232, 79.2089)},
    {"state": "Madhya Pradesh", "petrol": 106.28, "diesel": 91.68, "center": (22.9734, 78.6569)},
    {"state": "Maharashtra", "petrol": 103.50, "diesel": 90.03, "center": (19.7515, 75.7139)},
    {"state": "Uttar Pradesh", "petrol": 94.69, "diesel": 87.81, "center": (26.8467, 80.9462)},
    {"state": "Haryana", "petrol": 94.30, "diesel": 82.45, "center": (29.0588, 76.0856)},
    {"state": "Delhi", "petrol": 95.41, "diesel": 86.67, "center": (28.7041, 77.1025)},
    {"state": "Karnataka", "petrol": 101.94, "diesel": 91.68, "center": (15.3173, 75.7139)},
    {"state": "Tamil Nadu", "petrol": 102.63, "diesel": 94.24, "center": (11.1271, 78.6569)},
    {"state": "Kerala", "petrol": 107.54, "diesel": 96.84, "center": (10.8505, 76.2711)},
    {"state": "Gujarat", "petrol": 96.42, "diesel": 92.17, "center": (22.2587, 71.1924)},
    {"state": "Rajasthan", "petrol": 108.48, "diesel": 93.72, "center": (27.0238, 74.2179)},
    {"state": "Punjab", "petrol": 98.65, "diesel": 89.02, "center": (31.1471, 75.3412)},
    {"state": "Bihar", "petrol": 107.24, "diesel": 94.04, "center": (25.0961, 85.3131)},
    {"state": "West Bengal", "petrol": 104.67, "diesel": 92.97, "center": (22.9868, 87.8550)},
    {"state": "Odisha", "petrol": 103.19, "diesel": 94.76, "center": (20.9517, 85.0985)},
    {"state": "Assam", "petrol": 101.54, "diesel": 89.29, "center": (26.2006, 92.9376)},
    {"state": "Jharkhand", "petrol": 104.33, "diesel": 91.57, "center": (23.6102, 85.2799)},
    {"state": "Chhattisgarh", "petrol": 102.33, "diesel": 95.23, "center": (21.2787, 81.8661)},
    {"state": "Uttarakhand", "petrol": 95.81, "diesel": 90.56, "center": (30.0668, 79.0193)},
    {"state": "Himachal Pradesh", "petrol": 99.59, "diesel": 86.39, "center": (31.1048, 77.1734)},
    {"state": "Goa", "petrol": 97.57, "diesel": 89.70, "center": (15.2993, 74.1240)},
)

_OPEN_24_HOURS = "Open 24 Hours"

FUEL_STATIONS: tuple[dict, ...] = (
    {
        "station_id": "tel-001",
        "name": "Hippocampus Service Station",
        "brand": "BPCL",
        "state": "Telangana",
        "address": "Door No 103, Hyderabad, Telangana 500003",
        "hours": _OPEN_24_HOURS,
        "phone": "+914023249042",
        "coords": (17.385044, 78.486671),
    },
    {
        "station_id": "tel-002",
        "name": "KP Fill Point",
        "brand": "HP",
        "state": "Telangana",
        "address": "No 12/1/927/1, Asifnagar, Hyderabad, Telangana 500001",
        "hours": _OPEN_24_HOURS,
        "phone": "+918886552900",
        "coords": (17.3840, 78.4580),
    },
    {
        "station_id": "tel-003",
        "name": "Secunderabad Fuel Center",
        "brand": "IOCL",
        "state": "Telangana",
        "address": "Near Paradise Circle, Secunderabad, Telangana 500003",
        "hours": _OPEN_24_HOURS,
        "phone": "+914027898765",
        "coords": (17.4400, 78.4982),
    },
    {
        "station_id": "mp-001",
        "name": "Shakti Filling Station",
        "brand": "IOCL",
        "state": "Madhya Pradesh",
        "address": "NH 46, Lalghati, Bhopal, Madhya Pradesh 462030",
        "hours": _OPEN_24_HOURS,
        "phone": "+917552664123",
        "coords": (23.2599, 77.4126),
    },
    {
        "station_id": "mp-002",
        "name": "Highway Fuels",
        "brand": "BPCL",
        "state": "Madhya Pradesh",
        "address": "NH 3, Dewas Road, Indore, Madhya Pradesh 452010",
        "hours": _OPEN_24_HOURS,
        "phone": "+917312345678",
        "coords": (22.7196, 75.8577),
    },
    {
        "station_id": "mp-003",
        "name": "Gwalior Petrol Services",
        "brand": "HP",
        "state": "Madhya Pradesh",
        "address": "NH 3, Gwalior, Madhya Pradesh 474001",
        "hours": _OPEN_24_HOURS,
        "phone": "+917512345678",
        "coords": (26.2183, 78.1828),
    },
    {
        "station_id": "up-001",
        "name": "Sai Fuel Station",
        "brand": "HP",
        "state": "Uttar Pradesh",
        "address": "Faizabad Road, Lucknow, Uttar Pradesh 226016",
        "hours": _OPEN_24_HOURS,
        "phone": "+915224234567",
        "coords": (26.8467, 80.9462),
    },
    {
        "station_id": "up-002",
        "name": "Kanpur Fuel Center",
        "brand": "IOCL",
        "state": "Uttar Pradesh",
        "address": "NH 2, Kanpur, Uttar Pradesh 208001",
        "hours": _OPEN_24_HOURS,
        "phone": "+915123456789",
        "coords": (26.4499, 80.3319),
    },
    {
        "station_id": "up-003",
        "name": "Agra Fuel Junction",
        "brand": "BPCL",
        "state": "Uttar Pradesh",
        "address": "NH 2, Agra, Uttar Pradesh 282001",
        "hours": _OPEN_24_HOURS,
        "phone": "+915623456789",
        "coords": (27.1767, 78.0081),
    },
    {
        "station_id": "har-001",
        "name": "Gurugram Fuels",
        "brand": "BPCL",
        "state": "Haryana",
        "address": "NH 48, Sector 18, Gurgaon, Haryana 122022",
        "hours": _OPEN_24_HOURS,
        "phone": "+911242345678",
        "coords": (28.4595, 77.0266),
    },
    {
        "station_id": "har-002",
        "name": "Panipat Highway Services",
        "brand": "HP",
        "state": "Haryana",
        "address": "NH 1, Panipat, Haryana 132103",
        "hours": _OPEN_24_HOURS,
        "phone": "+911803456789",
        "coords": (29.3909, 76.9635),
    },
    {
        "station_id": "del-001",
        "name": "Delhi Highway Fuels",
        "brand": "IOCL",
        "state": "Delhi",
        "address": "Ring Road, Sarai Kale Khan, Delhi 110013",
        "hours": _OPEN_24_HOURS,
        "phone": "+911123456789",
        "coords": (28.5898, 77.2505),
    },
    {
        "station_id": "del-002",
        "name": "North Delhi Fuel Point",
        "brand": "BPCL",
        "state": "Delhi",
        "address": "GT Karnal Road, Model Town, Delhi 110009",
        "hours": _OPEN_24_HOURS,
        "phone": "+911127456789",
        "coords": (28.7041, 77.1925),
    },
    {
        "station_id": "mah-001",
        "name": "Mumbai Central Fuels",
        "brand": "HP",
        "state": "Maharashtra",
        "address": "Western Express Highway, Mumbai, Maharashtra 400050",
        "hours": _OPEN_24_HOURS,
        "phone": "+912228456789",
        "coords": (19.0760, 72.8777),
    },
    {
        "station_id": "mah-002",
        "name": "Pune Highway Services",
        "brand": "IOCL",
        "state": "Maharashtra",
        "address": "NH 4, Pune, Maharashtra 411045",
        "hours": _OPEN_24_HOURS,
        "phone": "+912025456789",
        "coords": (18.5204, 73.8567),
    },
)
