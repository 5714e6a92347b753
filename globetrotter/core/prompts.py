DEFAULT_DURATION = "3 days"
DEFAULT_INTERESTS = "General sightseeing, food, history"
DEFAULT_BUDGET = "Moderate"

suggestions_prompt = """Act as a local travel expert and suggest exactly 5 distinct activities for a trip to {city}.
Trip Duration: {duration}
Interests: {interests}

IMPORTANT: Return ONLY a valid JSON array with NO markdown formatting, NO backticks, NO explanatory text.
Each object must have these exact fields:
{{
  "title": "Activity Name",
  "category": "activity" or "food" or "other",
  "cost_est": 50,
  "description": "Brief description"
}}

Example format:
[{{"title":"Visit Eiffel Tower","category":"activity","cost_est":25,"description":"Iconic landmark"}},{{"title":"Louvre Museum","category":"activity","cost_est":20,"description":"World-famous art museum"}}]"""


trip_plan_prompt = """Create a comprehensive, detailed trip plan for {city}.

Trip Details:
- Duration: {duration}
- Interests: {interests}
- Budget: {budget}

Generate a detailed day-by-day itinerary in JSON format with the following structure:

{{
  "overview": "Brief overview of the trip (2-3 sentences)",
  "best_time_to_visit": "Best season/months to visit",
  "estimated_budget": "Total estimated budget in INR",
  "daily_itinerary": [
    {{
      "day": 1,
      "title": "Day title/theme",
      "morning": {{
        "time": "9:00 AM - 12:00 PM",
        "activities": ["Activity 1", "Activity 2"],
        "description": "What to do in the morning"
      }},
      "afternoon": {{
        "time": "12:00 PM - 5:00 PM",
        "activities": ["Activity 1", "Activity 2"],
        "description": "What to do in the afternoon"
      }},
      "evening": {{
        "time": "5:00 PM - 9:00 PM",
        "activities": ["Activity 1", "Activity 2"],
        "description": "What to do in the evening"
      }},
      "meals": {{
        "breakfast": "Restaurant/place suggestion",
        "lunch": "Restaurant/place suggestion",
        "dinner": "Restaurant/place suggestion"
      }},
      "estimated_cost": 5000
    }}
  ],
  "must_visit_places": [
    {{
      "name": "Place name",
      "description": "Brief description",
      "estimated_time": "2-3 hours",
      "cost": 500,
      "category": "historical/cultural/nature/food/shopping"
    }}
  ],
  "travel_tips": ["Tip 1", "Tip 2", "Tip 3"],
  "local_cuisine": ["Dish 1", "Dish 2", "Dish 3"],
  "transportation": "How to get around the city"
}}

IMPORTANT: Return ONLY valid JSON with NO markdown formatting, NO backticks, NO explanatory text."""


def build_suggestion_prompt(
    city: str,
    duration: str | None = None,
    interests: str | None = None,
) -> str:
    """Render the activity suggestion prompt, filling unset hints with defaults."""

    return suggestions_prompt.format(
        city=city,
        duration=duration or DEFAULT_DURATION,
        interests=interests or DEFAULT_INTERESTS,
    )


def build_trip_plan_prompt(
    city: str,
    duration: str | None = None,
    interests: str | None = None,
    budget: str | None = None,
) -> str:
    """Render the day-by-day itinerary prompt, filling unset hints with defaults."""

    return trip_plan_prompt.format(
        city=city,
        duration=duration or DEFAULT_DURATION,
        interests=interests or DEFAULT_INTERESTS,
        budget=budget or DEFAULT_BUDGET,
    )
