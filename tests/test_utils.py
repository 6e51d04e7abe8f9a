"""
Tests for the display formatters
"""
from modules.farmers.constants import AVATAR_COLORS
from modules.farmers.utils import avatar_color, avatar_initials, farmer_key, format_registered


class TestFormatters:

    def test_initials(self):
        assert avatar_initials("Abebe Kebede") == "AK"
        assert avatar_initials("sara  van tesfaye") == "SV"
        assert avatar_initials("") == "U"

    def test_avatar_color_is_stable(self):
        assert avatar_color("Abebe") == AVATAR_COLORS[ord("A") % len(AVATAR_COLORS)]
        assert avatar_color("") == AVATAR_COLORS[0]

    def test_unparseable_date_shows_dash(self):
        assert format_registered("not a date") == "-"
        assert format_registered(None) == "-"

    def test_farmer_key_prefers_id(self):
        assert farmer_key({"id": 7, "email": "a@x.io"}, 0) == "7"
        assert farmer_key({"email": "a@x.io"}, 3) == "a@x.io-3"
