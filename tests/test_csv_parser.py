"""Tests for the lenient CSV parser."""

from timeseries.csv_parser import parse_csv, parse_csv_line


def test_parse_csv_line_keeps_commas_inside_quotes():
    fields = parse_csv_line('"Korea, South",,35.9,127.7,5')
    assert fields == ['Korea, South', '', '35.9', '127.7', '5']


def test_parse_csv_line_trims_fields():
    assert parse_csv_line(' a , b ,c ') == ['a', 'b', 'c']


def test_parse_csv_maps_known_headers():
    text = "Province/State,Country/Region,Lat,Long,3/14/21,3/15/21\nOntario,Canada,51.25,-85.32,7,9\n"
    rows = parse_csv(text)

    assert len(rows) == 1
    row = rows[0]
    assert row.region_name == 'Canada'
    assert row.sub_region == 'Ontario'
    assert row.lat == 51.25
    assert row.lng == -85.32
    assert row.daily_values == {'3/14/21': 7, '3/15/21': 9}


def test_parse_csv_accepts_short_aliases_and_ignores_other_columns():
    text = "Province,Country,Lat,Long,UID,1/1/21\n,France,46.2,2.2,250,3\n"
    rows = parse_csv(text)

    assert rows[0].region_name == 'France'
    assert rows[0].sub_region is None
    assert list(rows[0].daily_values) == ['1/1/21']


def test_parse_csv_skips_lines_with_wrong_field_count():
    text = "\n".join([
        "Province/State,Country/Region,Lat,Long,1/1/21",
        ",Italy,41.9,12.6,5",
        ",Spain,40.4",
        ",France,46.2,2.2,3,extra",
        ",Greece,39.1,21.8,1",
    ])
    rows = parse_csv(text)

    # 5 lines - header - 2 malformed
    assert len(rows) == 2
    assert [r.region_name for r in rows] == ['Italy', 'Greece']


def test_parse_csv_quoted_region_counts_as_one_field():
    text = 'Province/State,Country/Region,Lat,Long,1/1/21\n,"Korea, South",35.9,127.7,12\n'
    rows = parse_csv(text)

    assert len(rows) == 1
    assert rows[0].region_name == 'Korea, South'


def test_parse_csv_coerces_bad_numbers_to_zero():
    text = "Province/State,Country/Region,Lat,Long,1/1/21,1/2/21\n,Nowhere,,abc,n/a,4\n"
    row = parse_csv(text)[0]

    assert row.lat == 0.0
    assert row.lng == 0.0
    assert row.daily_values == {'1/1/21': 0, '1/2/21': 4}


def test_parse_csv_handles_crlf_line_endings():
    text = "Province/State,Country/Region,Lat,Long,1/1/21\r\n,Italy,41.9,12.6,5\r\n"
    rows = parse_csv(text)

    assert rows[0].daily_values == {'1/1/21': 5}


def test_parse_csv_empty_input():
    assert parse_csv('') == []
    assert parse_csv('   \n') == []
    assert parse_csv('Province/State,Country/Region,Lat,Long,1/1/21') == []


def test_parse_csv_drops_columns_that_are_not_calendar_dates():
    text = "Province/State,Country/Region,Lat,Long,2/28/21,2/30/21\n,Italy,41.9,12.6,5,6\n"
    rows = parse_csv(text)

    assert len(rows) == 1
    assert rows[0].daily_values == {'2/28/21': 5}


def test_parse_csv_strips_byte_order_mark():
    text = "\ufeffCountry/Region,Lat,Long,1/1/21\nItaly,41.9,12.6,5\n"
    rows = parse_csv(text)

    assert rows[0].region_name == 'Italy'
    assert rows[0].lat == 41.9
    assert rows[0].daily_values == {'1/1/21': 5}
