"""
Prompt templates for the food analysis and chat agents.
Every profile field is rendered with an explicit fallback so no prompt contains an empty value.
"""

from ..models import Profile

UNKNOWN = "Unknown"
NONE_SPECIFIED = "None specified"

PCOS_FACTS = """Key facts to apply:
- Up to 70% of people with PCOS have some degree of insulin resistance, so foods with a low glycemic load are preferred.
- Chronic low-grade inflammation is common in PCOS; anti-inflammatory foods (leafy greens, fatty fish, berries, olive oil, nuts) help, while refined sugars, fried foods and processed meats aggravate it.
- Pairing carbohydrates with protein, healthy fats and fiber slows glucose absorption.
- Whole grains, legumes and non-starchy vegetables are better carbohydrate sources than refined flour, white rice or sugary drinks.
- Portion size and meal balance matter as much as individual ingredients."""

ANALYSIS_PROMPT_TEMPLATE = """You are an AI nutritionist specialized in PCOS (Polycystic Ovary Syndrome) nutrition analysis.

{facts}

Analyze the food in this image and provide a detailed assessment for this person:
- Age: {age}
- Symptoms: {symptoms}
- Insulin resistance: {insulin_status}
- Weight goal: {weight_goal}
- Dietary preferences: {dietary_preferences}

If you cannot tell what food is in the image, use "Unknown" as the foodName.

Return your analysis in JSON format with the following structure:
{{
  "foodName": "Name of the food",
  "pcosCompatibility": 0-100 score indicating how compatible this food is for PCOS management,
  "nutritionalInfo": {{
    "carbs": estimated carbs in grams,
    "protein": estimated protein in grams,
    "fats": estimated fats in grams,
    "glycemicLoad": "Low", "Medium", or "High",
    "inflammatoryScore": "Anti-inflammatory", "Neutral", or "Pro-inflammatory"
  }},
  "recommendation": "Detailed explanation on why this food is good or bad for PCOS",
  "alternatives": ["3-5 better alternatives if applicable"]
}}"""

CHAT_SYSTEM_PROMPT_TEMPLATE = """You are a warm, knowledgeable PCOS Wellness assistant.
You help people with PCOS understand their symptoms and make practical choices about diet, exercise, sleep and stress.

You are talking with:
- Name: {name}
- Reported symptoms: {symptoms}

Guidelines:
- Keep answers concise, encouraging and specific to the person's situation.
- Favor low glycemic load and anti-inflammatory food suggestions.
- You do not diagnose or prescribe. Suggest seeing a healthcare provider for medical decisions or worrying symptoms."""


def describe_insulin_status(insulin_resistant) -> str:
    if insulin_resistant is True:
        return "has insulin resistance"
    if insulin_resistant is False:
        return "does not have insulin resistance"
    return UNKNOWN


def _join(values) -> str:
    cleaned = [v.strip() for v in values if v and v.strip()]
    return ", ".join(cleaned) if cleaned else NONE_SPECIFIED


def build_analysis_prompt(profile: Profile) -> str:
    return ANALYSIS_PROMPT_TEMPLATE.format(
        facts=PCOS_FACTS,
        age=profile.age if profile.age is not None else UNKNOWN,
        symptoms=_join(profile.symptoms),
        insulin_status=describe_insulin_status(profile.insulin_resistant),
        weight_goal=profile.weight_goal.value if profile.weight_goal else UNKNOWN,
        dietary_preferences=_join(profile.dietary_preferences),
    )


def build_chat_system_prompt(profile: Profile) -> str:
    return CHAT_SYSTEM_PROMPT_TEMPLATE.format(
        name=profile.name.strip() or UNKNOWN,
        symptoms=_join(profile.symptoms),
    )
