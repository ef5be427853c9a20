import os
import boto3
import logging
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from services.secret_manager_service import access_secret_version

# Set up a module-level logger
log = logging.getLogger(__name__)

OWNER_ALERTS_TEMPLATE = 'owner_alerts_email.html'

def send_email(recipient_email: str, subject: str, template_name: str, template_env, context: dict, text_body: str | None = None) -> bool:
    """
    Renders `template_name` with `context` and sends it through Amazon SES.
    Returns True if successful, False otherwise.
    """
    if not recipient_email:
        log.error("No recipient email provided. Skipping email.")
        return False

    aws_region = os.environ.get("AWS_REGION", "us-east-1")
    sender_email = os.environ.get("SENDER_EMAIL", "noreply@rentwatch.app")

    # --- Andon Cord / Safety Net ---
    is_testing = os.environ.get("TESTING_MODE", "true").lower() == "true"
    if is_testing:
        original_email = recipient_email
        recipient_email = os.environ.get("TESTING_RECIPIENT", "alerts-test@rentwatch.app")
        log.warning(f"TESTING_MODE is active. Redirecting email from {original_email} to {recipient_email}")

    template = template_env.get_template(template_name)
    html_body = template.render(**context)

    aws_access_key_id = access_secret_version("AWS_ACCESS_KEY_ID")
    aws_secret_access_key = access_secret_version("AWS_SECRET_ACCESS_KEY")

    if not aws_access_key_id or not aws_secret_access_key:
        log.error("Failed to retrieve AWS credentials from Secret Manager.")
        return False

    try:
        ses_client = boto3.client(
            'ses',
            region_name=aws_region,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key
        )

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = sender_email
        msg['To'] = recipient_email

        if text_body:
            msg.attach(MIMEText(text_body, 'plain'))
        msg.attach(MIMEText(html_body, 'html'))

        ses_client.send_raw_email(
            Source=sender_email,
            Destinations=[recipient_email],
            RawMessage={'Data': msg.as_string()}
        )

        log.info(f"Successfully sent '{subject}' email to {recipient_email}")
        return True
    except Exception as e:
        log.error(f"An unexpected error occurred while sending email: {e}")
        return False

def _owner_alert_text(notifications: dict) -> str:
    lines = ["Hi,", "", "Here is today's summary of rent payments that need your attention.", ""]
    if notifications.get('overdue'):
        lines.append("Overdue:")
        for entry in notifications['overdue']:
            lines.append(f"  - {entry['tenantName']} (room {entry.get('roomNumber') or 'N/A'}): {entry['monthsPending']} month(s) behind, {entry['daysPending']} day(s) past due")
        lines.append("")
    if notifications.get('upcoming'):
        lines.append("Due soon:")
        for entry in notifications['upcoming']:
            lines.append(f"  - {entry['tenantName']} (room {entry.get('roomNumber') or 'N/A'}): due in {entry['daysRemaining']} day(s)")
        lines.append("")
    lines.append("This is an automated message, please do not reply.")
    return "\n".join(lines)

def send_owner_alert_email(owner_email: str, notifications: dict, template_env) -> bool:
    """
    Sends a property owner the daily summary of overdue and upcoming rent payments.
    """
    overdue_count = notifications.get('overdueCount', 0)
    upcoming_count = len(notifications.get('upcoming', []))
    if overdue_count:
        subject = f"Rent alert: {overdue_count} tenant(s) overdue"
    else:
        subject = f"Rent reminder: {upcoming_count} payment(s) due soon"

    context = {
        'overdue': notifications.get('overdue', []),
        'upcoming': notifications.get('upcoming', []),
        'critical_count': notifications.get('criticalCount', 0),
        'current_year': datetime.now().year,
    }
    return send_email(
        recipient_email=owner_email,
        subject=subject,
        template_name=OWNER_ALERTS_TEMPLATE,
        template_env=template_env,
        context=context,
        text_body=_owner_alert_text(notifications),
    )
