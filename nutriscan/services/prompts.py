"""
AI prompt templates for food analysis and meal planning.

Prompt text is data: ANALYSIS_PROMPTS and MEAL_PLAN_PROMPTS are looked up by
language (and analysis mode); the builders below only assemble the pieces.
Every analysis prompt is: role statement, task for the mode, JSON directive.
"""

from typing import Optional

from nutriscan.models.language import Language
from nutriscan.models.meal_plan import Gender, Goal, PlanDuration, UserProfile
from nutriscan.models.nutrition import (
    AnalysisMode,
    AnalysisRequest,
    ImageWithClarification,
    TextDescription,
)

# =============================================================================
# FOOD ANALYSIS
# =============================================================================

ANALYSIS_PROMPTS = {
    Language.SPANISH: {
        "expert": "Eres un experto nutricionista.",
        AnalysisMode.IMAGE_ONLY: """Analiza la imagen de esta comida.
1. Primero, determina si puedes identificar la comida con seguridad.
2. Si la imagen es ambigua, responde con: {"needsClarification": true, "clarificationQuestion": "¿Podrías describir qué es este plato?"}. Adapta la pregunta si tienes alguna idea.
3. Si la imagen es clara, realiza un análisis completo incluyendo análisis nutricional detallado (vitaminas, minerales, ácidos grasos). El campo 'needsClarification' debe ser false.""",
        AnalysisMode.IMAGE_WITH_CLARIFICATION: """Analiza la imagen de esta comida, con la aclaración del usuario: "{value}". Realiza un análisis completo incluyendo análisis nutricional detallado (vitaminas, minerales, ácidos grasos). El campo 'needsClarification' debe ser false.""",
        AnalysisMode.TEXT_DESCRIPTION: """Analiza la descripción: "{value}". Realiza un análisis completo incluyendo análisis nutricional detallado (vitaminas, minerales, ácidos grasos). Asume que la descripción es clara y realiza el análisis directamente. El campo 'needsClarification' debe ser false.""",
        "json": "Devuelve exclusivamente el objeto JSON.",
    },
    Language.ENGLISH: {
        "expert": "You are an expert nutritionist.",
        AnalysisMode.IMAGE_ONLY: """Analyze the image of this meal.
1. First, determine if you can identify the food with certainty.
2. If the image is ambiguous, respond with: {"needsClarification": true, "clarificationQuestion": "Could you describe what this dish is?"}. Adapt the question if you have some idea.
3. If the image is clear, perform a complete analysis including detailed nutritional analysis (vitamins, minerals, fatty acids). The 'needsClarification' field must be false.""",
        AnalysisMode.IMAGE_WITH_CLARIFICATION: """Analyze the image of this meal, with the user's clarification: "{value}". Perform a complete analysis including detailed nutritional analysis (vitamins, minerals, fatty acids). The 'needsClarification' field must be false.""",
        AnalysisMode.TEXT_DESCRIPTION: """Analyze the description: "{value}". Perform a complete analysis including detailed nutritional analysis (vitamins, minerals, fatty acids). Assume the description is clear and perform the analysis directly. The 'needsClarification' field must be false.""",
        "json": "Return only the JSON object.",
    },
}


def build_analysis_prompt(
    language: Language, mode: AnalysisMode, value: Optional[str] = None
) -> str:
    """
    Build the instruction text for a food analysis call.

    Args:
        language: Locale the oracle should answer in
        mode: Which kind of analysis is requested
        value: The user's clarification or food description (required for
               every mode except IMAGE_ONLY), embedded verbatim

    Returns:
        Instruction text ending with the JSON-only directive

    Raises:
        ValueError: If the mode needs a value and none was given
    """
    t = ANALYSIS_PROMPTS[Language(language)]
    mode = AnalysisMode(mode)

    if mode == AnalysisMode.IMAGE_ONLY:
        task = t[mode]
    else:
        if value is None:
            raise ValueError(f"{mode.value} prompt requires a value")
        task = t[mode].format(value=value)

    return f"{t['expert']} {task}\n{t['json']}"


def build_analysis_prompt_for(request: AnalysisRequest, language: Language) -> str:
    """Build the analysis prompt matching an AnalysisRequest variant."""
    if isinstance(request, ImageWithClarification):
        return build_analysis_prompt(language, request.mode, request.clarification)
    if isinstance(request, TextDescription):
        return build_analysis_prompt(language, request.mode, request.text)
    return build_analysis_prompt(language, request.mode)


# =============================================================================
# MEAL PLANNING
# =============================================================================

MEAL_PLAN_PROMPTS = {
    Language.SPANISH: {
        "expert": "Eres un nutricionista de clase mundial.",
        "create_plan": "Crea un plan de comidas detallado para una persona con el siguiente perfil:",
        "goal": "Objetivo",
        "gender": "Género",
        "age": "Edad",
        "weight": "Peso",
        "height": "Estatura",
        "restrictions": "Restricciones/Alergias",
        "dislikes": "Ingredientes que no le gustan",
        "duration": "Duración del plan",
        "not_specified": "No especificado",
        "none": "Ninguna",
        "goals": {
            Goal.MAINTAIN_WEIGHT: "Mantener peso",
            Goal.LOSE_WEIGHT: "Perder peso",
            Goal.GAIN_MUSCLE: "Ganar músculo",
            Goal.GENERAL_HEALTH: "Salud general",
            Goal.INTERMITTENT_FASTING: "Ayuno intermitente",
        },
        "genders": {
            Gender.MALE: "Masculino",
            Gender.FEMALE: "Femenino",
            Gender.OTHER: "Otro",
        },
        "durations": {
            PlanDuration.DAY: "Un día",
            PlanDuration.WEEK: "Una semana",
            PlanDuration.MONTH: "Un mes",
        },
        "fasting_instructions": "**Instrucciones para Ayuno Intermitente:**",
        "fasting_type": "Tipo de Ayuno",
        "fasting_prompt": """- Explica brevemente los beneficios de este tipo de ayuno.
- Proporciona un horario claro para el ayuno y la ventana de alimentación.
- Ofrece consejos sobre qué consumir durante el ayuno (agua, té, etc.).
- Las comidas proporcionadas deben ser para la ventana de alimentación.
- Recomienda 3-4 suplementos que podrían ser beneficiosos para esta persona y su objetivo.
- Completa los campos 'fastingProtocol', 'fastingRecommendations' y 'supplements'.""",
        "general_instructions": "**Instrucciones Generales:**",
        "general_prompt": """- El plan debe ser equilibrado, delicioso y realista.
- **NO INCLUYAS NINGÚN INGREDIENTE de la lista de Restricciones/Alergias ni de la lista de Ingredientes que no le gustan.**
- Para cada comida, proporciona un análisis nutricional detallado incluyendo: calorías, y listas de nutrientes (proteínas, carbohidratos, grasas), vitaminas (ej. Vitamina C, D) y minerales (ej. Hierro, Calcio).
- Devuelve exclusivamente un objeto JSON con el formato especificado.""",
    },
    Language.ENGLISH: {
        "expert": "You are a world-class nutritionist.",
        "create_plan": "Create a detailed meal plan for a person with the following profile:",
        "goal": "Goal",
        "gender": "Gender",
        "age": "Age",
        "weight": "Weight",
        "height": "Height",
        "restrictions": "Restrictions/Allergies",
        "dislikes": "Disliked Ingredients",
        "duration": "Plan Duration",
        "not_specified": "Not specified",
        "none": "None",
        "goals": {
            Goal.MAINTAIN_WEIGHT: "Maintain weight",
            Goal.LOSE_WEIGHT: "Lose weight",
            Goal.GAIN_MUSCLE: "Gain muscle",
            Goal.GENERAL_HEALTH: "General health",
            Goal.INTERMITTENT_FASTING: "Intermittent fasting",
        },
        "genders": {
            Gender.MALE: "Male",
            Gender.FEMALE: "Female",
            Gender.OTHER: "Other",
        },
        "durations": {
            PlanDuration.DAY: "One day",
            PlanDuration.WEEK: "One week",
            PlanDuration.MONTH: "One month",
        },
        "fasting_instructions": "**Instructions for Intermittent Fasting:**",
        "fasting_type": "Fasting Type",
        "fasting_prompt": """- Briefly explain the benefits of this type of fasting.
- Provide a clear schedule for fasting and the eating window.
- Offer advice on what to consume during the fast (water, tea, etc.).
- The provided meals should be for the eating window.
- Recommend 3-4 supplements that could be beneficial for this person and their goal.
- Fill in the 'fastingProtocol', 'fastingRecommendations' and 'supplements' fields.""",
        "general_instructions": "**General Instructions:**",
        "general_prompt": """- The plan should be balanced, delicious, and realistic.
- **DO NOT INCLUDE ANY INGREDIENTS from the Restrictions/Allergies list or the Disliked Ingredients list.**
- For each meal, provide a detailed nutritional analysis including: calories, and lists of nutrients (protein, carbs, fat), vitamins (e.g., Vitamin C, D), and minerals (e.g., Iron, Calcium).
- Return only the JSON object with the specified format.""",
    },
}


def build_meal_plan_prompt(profile: UserProfile, language: Language) -> str:
    """
    Build the instruction text for a meal plan call.

    The fasting block is appended only for the intermittent fasting goal.
    """
    t = MEAL_PLAN_PROMPTS[Language(language)]

    weight = f"{profile.weight} kg" if profile.weight else t["not_specified"]
    height = f"{profile.height} cm" if profile.height else t["not_specified"]

    lines = [
        f"{t['expert']} {t['create_plan']}",
        f"- {t['goal']}: {t['goals'][profile.goal]}",
        f"- {t['gender']}: {t['genders'][profile.gender]}",
        f"- {t['age']}: {profile.age}",
        f"- {t['weight']}: {weight}",
        f"- {t['height']}: {height}",
        f"- {t['restrictions']}: {profile.restrictions.strip() or t['none']}",
        f"- {t['dislikes']}: {profile.dislikes.strip() or t['none']}",
        f"- {t['duration']}: {t['durations'][profile.plan_duration]}",
    ]

    sections = ["\n".join(lines)]

    if profile.is_fasting:
        sections.append(
            f"{t['fasting_instructions']}\n"
            f"- {t['fasting_type']}: {profile.fasting_type.value}.\n"
            f"{t['fasting_prompt']}"
        )

    sections.append(f"{t['general_instructions']}\n{t['general_prompt']}")

    return "\n\n".join(sections)
