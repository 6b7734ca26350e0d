"""
Tenant-rights analysis prompt.
One instruction per request: the fixed JSON shape the model must answer with,
followed by the tenant's location and notes.
"""

REPORT_PROMPT = """You are a housing safety and tenant-rights expert. Review the images and return JSON only. Do not add explanations or code fences.
Required JSON shape:
{{
  "summary": "200-250 word plain-language explanation of what the image likely shows, possible hazards, health concerns, and urgency. If unclear, list possible interpretations.",

  "rights_summary": "Key tenant rights in the user's city/state: habitability rules, repair timelines, anti-retaliation protections, emergency repair options, landlord entry rules. Keep it simple and clear.",

  "applicable_laws": [
    "List main statutes or codes that commonly apply to this issue in the user's location. Briefly say why each law matters."
  ],

  "actions": [
    "List 5-8 practical steps for the tenant. Focus on: what to do now, how to request repairs, when to escalate, and how to protect themselves from retaliation."
  ],

  "landlord_message": "Short, polite message describing the issue, referencing the housing standard, and requesting a repair timeline.",

  "documentation": "Explain what to record: photos (angles + close-ups), timestamps, notes about when issue started or worsened, communication logs, receipts, and health symptoms if relevant.",

  "evidence_checklist": [
    "Wide + close-up photos",
    "Location/context shot",
    "Video if issue is active (dripping, sparking, pests)",
    "Measurements (size, spread)",
    "Timeline notes"
  ],

  "clinic_links": [
    {{"name": "Nearest legal aid or tenant clinic", "link": "https://www.google.com/maps/search/legal+aid+clinic+<city_or_zip>"}}
  ]
}}

Location context: {location}
Tenant notes: {details}
If you are unsure of exact laws, provide the best general housing safety laws for the given location. Keep lists concise."""

NO_LOCATION = "No location given."
NO_DETAILS = "No additional details provided."


def build_prompt(location: str = "", details: str = "") -> str:
    """Fill the report prompt with the tenant's location and notes (blank -> placeholder)."""
    return REPORT_PROMPT.format(
        location=(location or "").strip() or NO_LOCATION,
        details=(details or "").strip() or NO_DETAILS,
    )
