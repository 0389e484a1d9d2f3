"""Firebase Admin app initialization shared by the identity and profile adapters."""

import json
import logging

import firebase_admin
from firebase_admin import credentials

logger = logging.getLogger(__name__)


def init_firebase_app(service_account_json: str | None) -> firebase_admin.App:
    """
    Initialize the default Firebase app from a service account JSON string.

    Returns the existing default app when already initialized.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if not service_account_json:
        raise RuntimeError("FIREBASE_SERVICE_ACCOUNT_JSON not set")

    cert = credentials.Certificate(json.loads(service_account_json))
    app = firebase_admin.initialize_app(cert)
    logger.info("Firebase app initialized (project: %s)", app.project_id)
    return app
