# Built-in service listings, used when nothing usable is stored yet
DEFAULT_SERVICES = [
    {"name": "Vaccination", "description": "Keep your pets healthy", "icon": "fas fa-syringe"},
    {"name": "Dental Cleaning", "description": "Clean and healthy teeth", "icon": "fas fa-tooth"},
    {"name": "Surgery Consultation", "description": "Expert surgical advice", "icon": "fas fa-stethoscope"},
    {"name": "Pet Grooming", "description": "Make your pets shine", "icon": "fas fa-cut"},
]

APPOINTMENT_FIELDS = ("name", "email", "pet", "service", "date")

# --- Persistence keys ---
DARK_MODE_KEY = "darkMode"
APPOINTMENTS_KEY = "appointments"
SERVICES_KEY = "services"
LAST_FORM_DATA_KEY = "lastFormData"
LAST_SEARCH_SUFFIX = "_lastSearch"

# --- Page regions (markup is written into these) ---
ROOT = "html"
HEADER = "#main-header"
CONTENT_REGION = "#page-content"
NAV_MESSAGE = "#nav-message"
SEARCH_RESULTS = "#search-results"
SERVICES_REGION = "#services-container"
APPOINTMENTS_BODY = "#appointments-table tbody"
FORM_MESSAGE = "#form-message"
TOAST_CONTAINER = "#toast-container"
MOBILE_MENU = "#mobile-menu"
NAVBAR_CONTENT = "#navbarSupportedContent"

# --- Event sources ---
WINDOW = "window"
DOCUMENT = "document"
NAV_LINK = ".nav-link"
AJAX_BUTTON = ".ajax-btn"
SEARCH_INPUT = "#search-input"
APPOINTMENT_FORM = "#appointment-form"
DARK_MODE_TOGGLE = "#dark-mode-toggle"
MOBILE_MENU_TOGGLE = "#mobile-menu-toggle"
MOBILE_MENU_CLOSE = "#mobile-menu-close"
NAVBAR_TOGGLER = ".navbar-toggler"
