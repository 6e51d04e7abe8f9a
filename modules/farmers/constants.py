"""
Constants for the Farmers module
Centralized configuration and shared constants
"""

# =====================================================
# QUERY SETTINGS
# =====================================================

ALL_CATEGORIES = "All"
UNKNOWN_CATEGORY = "Unknown"

SORT_NAME = "name"
SORT_FARM_SIZE = "farmSize"
SORT_CREATED_AT = "createdAt"
SORT_KEYS = (SORT_NAME, SORT_FARM_SIZE, SORT_CREATED_AT)

SORT_ASC = "asc"
SORT_DESC = "desc"

SUGGESTION_LIMIT = 6
DEBOUNCE_SECONDS = 0.22


# =====================================================
# PAGINATION SETTINGS
# =====================================================

TABLE_PAGE_SIZE = 8   # Dashboard table rows per page
GRID_PAGE_SIZE = 9    # Farmers grid cards per page


# =====================================================
# REGISTRATION
# =====================================================

FARM_TYPES = ["Grains", "Vegetables", "Fruits", "Livestock", "Mixed"]

REGISTRATION_STEPS = ["Personal Info", "Farm Details", "Review & Submit"]

FARMER_FIELDS = ["name", "email", "subcity", "phone", "farmName", "farmType", "farmSize"]


# =====================================================
# EXPORT COLUMNS
# =====================================================

EXPORT_COLUMNS = [
    ("name", "Name"),
    ("email", "Email"),
    ("subcity", "Subcity"),
    ("phone", "Phone"),
    ("farmName", "Farm Name"),
    ("farmType", "Farm Type"),
    ("farmSize", "Farm Size"),
    ("createdAt", "Registered"),
]

NO_DATA_NOTICE = "No data to export."


# =====================================================
# UI LABELS
# =====================================================

SORT_LABELS = {
    SORT_CREATED_AT: "Newest",
    SORT_NAME: "Name",
    SORT_FARM_SIZE: "Size",
}

AVATAR_COLORS = ["#4ade80", "#60a5fa", "#c084fc", "#facc15", "#f472b6"]
CHART_COLORS = ["#4ade80", "#60a5fa", "#facc15", "#f87171", "#34d399"]
