"""User-facing strings that the core needs (error texts, fallbacks, labels)."""

from nutriscan.models.language import Language
from nutriscan.models.meal_plan import BmiCategory

MESSAGES = {
    Language.SPANISH: {
        "analysis_error": "Error en el análisis",
        "unexpected_format": "La respuesta de la API tiene un formato inesperado.",
        "analysis_failed": "No se pudo completar el análisis. Inténtalo de nuevo.",
        "image_not_found": "No se encontró la imagen original. Por favor, súbela de nuevo.",
        "invalid_image": "El archivo no es una imagen PNG o JPEG válida.",
        "unexpected": "Ocurrió un error inesperado.",
        "default_plan_title": "Plan de Comidas",
        "bmi": {
            BmiCategory.UNDERWEIGHT: "Bajo peso",
            BmiCategory.NORMAL: "Normal",
            BmiCategory.OVERWEIGHT: "Sobrepeso",
            BmiCategory.OBESE: "Obesidad",
        },
    },
    Language.ENGLISH: {
        "analysis_error": "Analysis error",
        "unexpected_format": "The API response has an unexpected format.",
        "analysis_failed": "The analysis could not be completed. Please try again.",
        "image_not_found": "The original image was not found. Please upload it again.",
        "invalid_image": "The file is not a valid PNG or JPEG image.",
        "unexpected": "An unexpected error occurred.",
        "default_plan_title": "Meal Plan",
        "bmi": {
            BmiCategory.UNDERWEIGHT: "Underweight",
            BmiCategory.NORMAL: "Normal",
            BmiCategory.OVERWEIGHT: "Overweight",
            BmiCategory.OBESE: "Obese",
        },
    },
}


def get_message(language: Language, key: str) -> str:
    return MESSAGES[Language(language)][key]


def bmi_label(language: Language, bmi: tuple) -> str:
    """Format a UserProfile.bmi() tuple as e.g. '22.9 (Normal)'."""
    value, category = bmi
    return f"{value:.1f} ({MESSAGES[Language(language)]['bmi'][category]})"
