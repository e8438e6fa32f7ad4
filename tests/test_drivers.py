from __future__ import annotations

from pyracescan.ingestion.drivers import FALLBACK_DRIVERS, find_mount_collisions, parse_drivers
from pyracescan.models.driver import DriverRecord

DRIVERS_CSV = (
    "Driver Number,Driver Name,Team,Hometown,Sponsor,Class,number_logo,frequency_1 (Hz)\n"
    "28,Landon S. Huffman,Huffman Racing,Mooresville NC,Acme,LMSC,/static/logos/28.png,461.1125\n"
    '62,Keelen Harvick,KHI,Bakersfield CA,"Busch, Inc","SMT, LMSC",,\n'
)


def test_parse_drivers_by_header_name() -> None:
    drivers = parse_drivers(DRIVERS_CSV)

    assert [d.number for d in drivers] == ["28", "62"]
    huffman, harvick = drivers
    assert huffman.name == "Landon S. Huffman"
    assert huffman.class_type == "LMSC"
    assert huffman.logo == "/static/logos/28.png"
    assert huffman.frequency == "461.1125"
    assert huffman.plain_mount == "/lmsc-28-landon-s-huffman.mp3"
    assert huffman.icecast_mount == "/icecast/lmsc-28-landon-s-huffman.mp3"

    assert harvick.class_list == ("SMT", "LMSC")
    assert harvick.class_type == "SMT"
    assert harvick.plain_mount == "/smt-62-keelen-harvick.mp3"
    assert harvick.logo == ""


def test_parse_drivers_positional_fallback_without_known_headers() -> None:
    csv_text = "n,who,a,b,c,cls\n9,Nine Driver,x,y,z,plm\n"

    (driver,) = parse_drivers(csv_text)

    assert driver.number == "9"
    assert driver.name == "Nine Driver"
    assert driver.class_type == "PLM"
    assert driver.frequency == ""


def test_parse_drivers_short_row_does_not_raise() -> None:
    (driver,) = parse_drivers("Driver Number,Driver Name,Class\n5\n")

    assert driver.number == "5"
    assert driver.name == ""
    assert driver.class_type == ""
    assert driver.plain_mount == "/class-5-5.mp3"


def test_parse_drivers_empty_or_header_only_uses_fallback() -> None:
    assert parse_drivers("") == list(FALLBACK_DRIVERS)
    assert parse_drivers(None) == list(FALLBACK_DRIVERS)
    assert parse_drivers("Driver Number,Driver Name\n") == list(FALLBACK_DRIVERS)


def test_fallback_drivers_have_mounts() -> None:
    assert [d.plain_mount for d in FALLBACK_DRIVERS] == [
        "/smt-62-keelen-harvick.mp3",
        "/smt-00-chase-burrow.mp3",
        "/lmsc-28-landon-s-huffman.mp3",
    ]


def test_find_mount_collisions_reports_shared_slugs() -> None:
    drivers = [
        DriverRecord(number="7", name="AJ Fox", class_type="SMT"),
        DriverRecord(number="7", name="AJ  Fox!", class_type="smt"),
        DriverRecord(number="8", name="AJ Fox", class_type="SMT"),
    ]

    collisions = find_mount_collisions(drivers)

    assert list(collisions) == ["/smt-7-aj-fox.mp3"]
    assert [d.name for d in collisions["/smt-7-aj-fox.mp3"]] == ["AJ Fox", "AJ  Fox!"]
