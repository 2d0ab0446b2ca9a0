"""
Single source of truth for database tables that exist after migrations (001–002).

Use these names when writing raw SQL (e.g. DELETE in reset scripts).
"""
# All tables that exist in the DB. Must match models and migrations.
ALL_TABLE_NAMES = (
    "dustbins",
    "notifications",
    "collections",
    "analytics",
    "user_profile",
)

# Tables cleared when resetting demo data. Children first so FK order holds.
DEMO_TABLE_NAMES = (
    "analytics",
    "collections",
    "notifications",
    "dustbins",
    "user_profile",
)
