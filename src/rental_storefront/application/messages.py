"""Viewer-facing texts. The storefront is French-speaking."""

MISSING_CODE_OR_EMAIL = "Complétez la clé de licence Payhip et votre email."
VALIDATION_FAILED = "Validation Payhip impossible."
CODE_REJECTED = "Ce code Payhip n'est pas valide."
NO_ACCESS = "Vous n'avez pas accès à ce contenu. Ajoutez un code valide."
CODE_REQUIRED = "Validez votre code Payhip pour accéder à la vidéo."
NO_ELIGIBLE_CODE = "Ce code a expiré ou ne donne pas accès à ce contenu."
SIGNED_URL_UNAVAILABLE = "Lien sécurisé momentanément indisponible."
RENTAL_NOT_FOUND = "Location introuvable."
VIDEO_LOAD_FAILED = "Impossible de charger la vidéo."
WATCH_IN_PROGRESS = "Chargement de la vidéo déjà en cours."
CATALOG_LOAD_FAILED = "Impossible de charger le catalogue."
CHAT_FAILED = "L'assistant est momentanément indisponible."
SURVEY_FAILED = "Impossible d'envoyer le questionnaire."
WRONG_ADMIN_PASSWORD = "Mot de passe incorrect"
ADMIN_REQUIRED = "Connexion administrateur requise."
NO_CACHED_RENTAL = "Aucune location active pour ce film."

PERMANENT = "Permanent"
EXPIRED = "Expiré"
FULL_ACCESS_LABEL = "Accès complet temporaire"
FILM_LABEL = "Film: {value}"
CATEGORY_LABEL = "Catégorie: {value}"


def describe_error(exc: Exception, fallback: str) -> str:
    """Prefers the message the server sent; falls back to the localized text."""
    server_message = getattr(exc, "server_message", None)
    if server_message:
        return str(server_message)
    return fallback
