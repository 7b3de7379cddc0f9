from __future__ import annotations

import json
import logging
import os

import firebase_admin
from firebase_admin import credentials, firestore

logger = logging.getLogger(__name__)


def initialize_firebase(
    *,
    service_account_key: str = "",
    service_account_key_path: str = "",
) -> firebase_admin.App:
    """Initialize the Firebase Admin SDK once and return the default app.

    Credential lookup order:
    1. service account JSON passed as a string (env FIREBASE_SERVICE_ACCOUNT_KEY)
    2. service account key file (env FIREBASE_SERVICE_ACCOUNT_KEY_PATH)
    3. Application Default Credentials (GOOGLE_APPLICATION_CREDENTIALS, cloud metadata)
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if service_account_key:
        try:
            cred = credentials.Certificate(json.loads(service_account_key))
            app = firebase_admin.initialize_app(cred)
            logger.info("Firebase initialized with service account key from environment")
            return app
        except ValueError:
            logger.exception("FIREBASE_SERVICE_ACCOUNT_KEY is not a valid service account JSON")

    if service_account_key_path and os.path.exists(service_account_key_path):
        app = firebase_admin.initialize_app(credentials.Certificate(service_account_key_path))
        logger.info("Firebase initialized with service account key file %s", service_account_key_path)
        return app

    app = firebase_admin.initialize_app()
    logger.info("Firebase initialized with Application Default Credentials")
    return app


def firestore_client(settings) -> "firestore.Client":
    app = initialize_firebase(
        service_account_key=getattr(settings, "FIREBASE_SERVICE_ACCOUNT_KEY", ""),
        service_account_key_path=getattr(settings, "FIREBASE_SERVICE_ACCOUNT_KEY_PATH", ""),
    )
    return firestore.client(app)
