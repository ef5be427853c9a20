# functions/services/db_service.py

import logging
from firebase_admin import firestore, auth, exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from constants import TENANTS_COLLECTION, PAYMENTS_COLLECTION, OWNER_FIELD

log = logging.getLogger(__name__)

def _get_collection(collection_name: str, user_id: str | None = None) -> list:
    query = firestore.client().collection(collection_name)
    if user_id:
        query = query.where(filter=FieldFilter(OWNER_FIELD, '==', user_id))
    return [{**doc.to_dict(), 'id': doc.id} for doc in query.stream()]

def get_tenants(user_id: str | None = None) -> list:
    """
    Gets tenants from Cloud Firestore, optionally restricted to one owner.
    """
    return _get_collection(TENANTS_COLLECTION, user_id)

def get_payments(user_id: str | None = None) -> list:
    """
    Gets the complete payment history from Cloud Firestore, optionally restricted to one owner.
    The result is never paginated: payment status is only correct against the full history.
    """
    return _get_collection(PAYMENTS_COLLECTION, user_id)

def get_owner_email(user_id: str) -> str | None:
    """
    Looks up a property owner's e-mail address in Firebase Authentication.
    """
    try:
        return auth.get_user(user_id).email
    except auth.UserNotFoundError:
        log.warning(f"No Firebase Authentication user found for owner {user_id}.")
        return None
    except (ValueError, exceptions.FirebaseError) as e:
        log.error(f"Could not look up email for owner {user_id}: {e}")
        return None
