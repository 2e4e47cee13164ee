"""fakesns: an in-process fake of a publish/subscribe notification service.

Topics accept published messages and hold them until a *drain* fans them
out, exactly once, to every current subscription:
  - queue subscriptions receive the SNS notification JSON as a queue entry
  - HTTP(S) subscriptions receive it as a POST with the SNS headers
  - a repeated drain never delivers the same message twice
"""

__version__ = "0.2.0"
__description__ = "In-process fake SNS with on-demand drain to queue and HTTP subscribers"

from fakesns.core.context import SnsContext
from fakesns.models.delivery import DrainReport
from fakesns.models.envelopes import NotificationEnvelope

__all__ = ["SnsContext", "DrainReport", "NotificationEnvelope", "__version__"]
