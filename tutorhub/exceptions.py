"""
Exception types raised by the listing pipeline and its collaborators
"""

from typing import Dict


class TutorHubError(Exception):
    """Base class for all application errors"""


class RemoteStoreError(TutorHubError):
    """Firestore read or write failed"""


class MediaUploadError(TutorHubError):
    """Photo upload to the media CDN failed"""


class InvalidTokenError(TutorHubError):
    """Firebase ID token could not be verified"""


class AuthenticationRequiredError(TutorHubError):
    """An operation needs a signed-in user"""


class InvalidLocationError(TutorHubError, ValueError):
    """District does not belong to the selected province"""


class SubmissionError(TutorHubError):
    """Listing could not be created; the form data is left untouched"""


class FormValidationError(TutorHubError):
    """Local form validation failed before any remote call"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid form fields: {fields}")
