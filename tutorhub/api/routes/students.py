"""
Student requests, browsed by teachers
"""

from tutorhub.api.routes.listings import build_listing_router
from tutorhub.models.listing import Role

router = build_listing_router(Role.STUDENT)
