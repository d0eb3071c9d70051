import logging
from django.http import JsonResponse
from django.template.loader import render_to_string
from django.views.decorators.http import require_GET
from .constants import DEFAULT_SERVICES

logger = logging.getLogger(__name__)

# slug -> fragment template swapped into #page-content
PAGES = {
	"home": "pages/home.html",
	"about": "pages/about.html",
	"services": "pages/services.html",
	"contact": "pages/contact.html",
	"appointment": "pages/appointment.html",
}

@require_GET
def page_fragment(request, slug):
	"""
	Navigation endpoint: {"status": "success", "html": ...} for known pages,
	{"status": "error", "message": "Not found"} otherwise.
	"""
	template = PAGES.get(slug)
	if template is None:
		logger.info("Unknown page requested: %s", slug)
		return JsonResponse({"status": "error", "message": "Not found"})

	html = render_to_string(template, {"services": DEFAULT_SERVICES}, request=request)
	return JsonResponse({"status": "success", "html": html})
