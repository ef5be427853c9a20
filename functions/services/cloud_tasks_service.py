import os
import json
import logging
from google.cloud import tasks_v2

# Set up a module-level logger
log = logging.getLogger(__name__)

WORKER_FUNCTION = 'send_owner_alert_worker'

def enqueue_owner_alert_tasks(owner_alerts: list):
    """
    Enqueues one Cloud Tasks HTTP task per owner to send their payment alert email.
    Each item is a dict with 'owner_id', 'owner_email' and 'notifications'.
    """
    project = os.environ.get('GCLOUD_PROJECT', 'rentwatch-app')
    location = os.environ.get('TASKS_LOCATION', 'us-central1')
    queue = os.environ.get('TASKS_QUEUE', 'owner-alerts-queue')

    tasks_client = tasks_v2.CloudTasksClient()
    parent = tasks_client.queue_path(project, location, queue)
    url = f"https://{location}-{project}.cloudfunctions.net/{WORKER_FUNCTION}"

    for owner_alert in owner_alerts:
        payload = json.dumps(owner_alert)

        task = {
            "http_request": {
                "http_method": tasks_v2.HttpMethod.POST,
                "url": url,
                "headers": {"Content-type": "application/json"},
                "body": payload.encode(),
            }
        }

        try:
            response = tasks_client.create_task(parent=parent, task=task)
            log.info(f"Created task {response.name} for owner {owner_alert['owner_id']}")
        except Exception as e:
            log.error(f"Error creating task for owner {owner_alert['owner_id']}: {e}")
