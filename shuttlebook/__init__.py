"""Initialize the Flask app, its configuration and the Firebase connection."""

import json
import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask

from .core.constants import DEFAULT_PER_MATCH_REWARD, DEFAULT_SERVICE_FEE


def _load_credentials(app):
    """Find Firebase credentials: env JSON, then a local file, then defaults."""
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            return credentials.Certificate(cred_info), cred_info.get("project_id")
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    cred_path = os.path.join(
        os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
    )
    if os.path.exists(cred_path):
        try:
            with open(cred_path, "r") as f:
                cred_info = json.load(f)
            return credentials.Certificate(cred_path), cred_info.get("project_id")
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error loading credentials from file: {e}")

    try:
        return credentials.ApplicationDefault(), os.environ.get("FIREBASE_PROJECT_ID")
    except Exception as e:
        app.logger.error(
            f"Could not find any valid credentials (env, file, or default): {e}"
        )
    return None, None


def init_firebase(app):
    """Initialize the Firebase Admin SDK once per process."""
    cred, project_id = _load_credentials(app)
    if not cred or firebase_admin._apps:
        return
    options = {"projectId": project_id} if project_id else None
    try:
        firebase_admin.initialize_app(cred, options)
    except ValueError:
        # Already initialized elsewhere in this process.
        app.logger.info("Firebase app already initialized.")


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        DEFAULT_SERVICE_FEE=float(
            os.environ.get("DEFAULT_SERVICE_FEE") or DEFAULT_SERVICE_FEE
        ),
        DEFAULT_PER_MATCH_REWARD=float(
            os.environ.get("DEFAULT_PER_MATCH_REWARD") or DEFAULT_PER_MATCH_REWARD
        ),
    )

    if test_config:
        app.config.update(test_config)

    # Tests patch the Firestore client instead of connecting
    if not app.config.get("TESTING"):
        init_firebase(app)

    from .cli import cli

    app.cli.add_command(cli)

    return app
