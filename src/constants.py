"""Shared constants for themesync."""

# Persisted entries
DEFAULT_STORAGE_KEY = "themesync"
DEFAULT_MODE_STORAGE_KEY = "theme"

# Presentation target
ATTRIBUTE_PREFIX = "data-"

# Resolved appearances
LIGHT = "light"
DARK = "dark"
APPEARANCES = (LIGHT, DARK)

# Default key names for light_dark / system strategies
SYSTEM = "system"

# Appearance mirror channels on the presentation target
SELECTOR_COLOR_SCHEME = "color-scheme"
SELECTOR_CLASS = "class"
SELECTORS = (SELECTOR_COLOR_SCHEME, SELECTOR_CLASS)

# Attribute names used for the mirror channels in mutation records
STYLE_ATTRIBUTE = "style"
CLASS_ATTRIBUTE = "class"

# Observers that can be enabled in SyncOptions
OBSERVE_STORAGE = "storage"
OBSERVE_PRESENTATION = "presentation"
OBSERVERS = (OBSERVE_STORAGE, OBSERVE_PRESENTATION)
