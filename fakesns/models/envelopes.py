"""Notification envelope: the payload every subscriber receives.

Field order and aliases reproduce the SNS notification JSON document.
The simulated service never signs anything, so the signature fields carry
fixed placeholder values.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

NOTIFICATION_TYPE = "Notification"
FAKE_SIGNATURE = "Fake"
SIGNATURE_VERSION = "1"
SIGNING_CERT_URL = (
    "https://sns.us-east-1.amazonaws.com/"
    "SimpleNotificationService-f3ecfb7224c7233fe7bb5f59f96de52f.pem"
)


class NotificationEnvelope(BaseModel):
    """A rendered SNS ``Notification`` document.

    Construct with the Python field names; serialize with
    :meth:`to_wire` / :meth:`to_json` to get the wire key names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(default=NOTIFICATION_TYPE, alias="Type")
    message: str = Field(alias="Message")
    message_id: str = Field(alias="MessageId")
    signature: str = Field(default=FAKE_SIGNATURE, alias="Signature")
    signature_version: str = Field(default=SIGNATURE_VERSION, alias="SignatureVersion")
    signing_cert_url: str = Field(default=SIGNING_CERT_URL, alias="SigningCertURL")
    subject: str | None = Field(default=None, alias="Subject")
    timestamp: str = Field(alias="Timestamp")
    topic_arn: str = Field(alias="TopicArn")
    unsubscribe_url: str = Field(default="", alias="UnsubscribeURL")

    def to_wire(self) -> dict[str, Any]:
        """Return the flat wire-format dict (SNS key names, ``Subject`` kept as None)."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Return the wire-format JSON text."""
        return self.model_dump_json(by_alias=True)
