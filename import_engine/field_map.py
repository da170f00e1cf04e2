"""
import_engine.field_map - Column vocabulary for people import/export.

Header names are matched after trim + lowercase, so these are the only
keys later stages ever look up.
"""

# Contact channels stored under Person.contacts, in template column order
CONTACT_CHANNELS: tuple[str, ...] = (
    "instagram",
    "whatsapp",
    "linkedin",
    "github",
    "discord",
    "email",
    "phone",
    "twitter",
    "telegram",
    "website",
)

# Channels compared exactly when looking for duplicates
DUPLICATE_CHANNELS: tuple[str, ...] = ("phone", "email", "whatsapp")

TEXT_FIELDS: tuple[str, ...] = ("profession", "role", "notes")
LIST_FIELDS: tuple[str, ...] = ("skills", "tags")

# Full column order used by the template and by exports
COLUMNS: tuple[str, ...] = (
    ("name", "profession", "role")
    + LIST_FIELDS
    + CONTACT_CHANNELS
    + ("notes",)
)

# Human descriptions for the template's Instructions sheet
FIELD_DESCRIPTIONS: dict[str, str] = {
    "name":       "Full name (Required)",
    "profession": "Job title or profession",
    "role":       "Relationship type (Friend, Colleague, Client, etc.)",
    "skills":     "Technical or professional skills (comma-separated)",
    "tags":       "Categories or labels (comma-separated)",
    "instagram":  "Instagram username (with or without @)",
    "whatsapp":   "WhatsApp number",
    "linkedin":   "LinkedIn username or profile URL",
    "github":     "GitHub username",
    "discord":    "Discord username with discriminator (e.g., user#1234)",
    "email":      "Email address",
    "phone":      "Phone number",
    "twitter":    "Twitter/X username",
    "telegram":   "Telegram username",
    "website":    "Personal or professional website URL",
    "notes":      "Additional information or notes",
}
