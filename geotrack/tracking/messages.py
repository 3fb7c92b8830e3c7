"""Status labels and explanatory text for authorization outcomes."""

from geotrack.models.location import AuthorizationStatus

STATUS_CALIBRATING = "Calibrating"
STATUS_NOT_DETERMINED = "Not determined"
STATUS_RESTRICTED = "Restricted Access"
STATUS_DENIED = "Denied access"
STATUS_ALLOWED = "Allowed access"


def status_label(status: AuthorizationStatus) -> str:
    """Short label passed to status and result callbacks."""
    match status:
        case AuthorizationStatus.RESTRICTED:
            return STATUS_RESTRICTED
        case AuthorizationStatus.DENIED:
            return STATUS_DENIED
        case AuthorizationStatus.NOT_DETERMINED:
            return STATUS_NOT_DETERMINED
        case (
            AuthorizationStatus.AUTHORIZED_ALWAYS
            | AuthorizationStatus.AUTHORIZED_WHEN_IN_USE
        ):
            return STATUS_ALLOWED


def verbose_message(status: AuthorizationStatus) -> str:
    """Long-form explanation of an authorization outcome."""
    match status:
        case AuthorizationStatus.NOT_DETERMINED:
            return "You have not yet made a choice with regards to this application."
        case AuthorizationStatus.RESTRICTED:
            return (
                "This application is not authorized to use location services. "
                "Due to active restrictions on location services, the user cannot "
                "change this status, and may not have personally denied authorization."
            )
        case AuthorizationStatus.DENIED:
            return (
                "You have explicitly denied authorization for this application, "
                "or location services are disabled in Settings."
            )
        case AuthorizationStatus.AUTHORIZED_ALWAYS:
            return "App is Authorized to use location services."
        case AuthorizationStatus.AUTHORIZED_WHEN_IN_USE:
            return (
                "You have granted authorization to use your location only "
                "when the app is visible to you."
            )
