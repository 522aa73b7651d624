INTENT_CLASSIFICATION_PROMPT = '''You are an intent classifier for Ascent Administrative Services phone system.

Classify the following caller statement into EXACTLY ONE category:
- "claims" - anything about filing claims, claim status, adjusters, accidents, losses, rentals, payments, denials
- "onboarding" - anything about agent support, dealer support, contracting, appointments, becoming an agent/dealer, portals, logins, commissions, training
- "unknown" - unclear or doesn't fit above categories

Caller said: "{utterance}"

Respond with ONLY the category name, nothing else.'''

GREETING = (
    "Thank you for calling Ascent Administrative Services. "
    "Please tell me briefly how I can help you today. "
    "For example, you can say file a claim, or agent and dealer support. "
    "You can also press 1 for claims, or 2 for agent and dealer support."
)

CLAIMS_SELF_SERVICE_MESSAGE = (
    "You can file a new claim or check the status of an existing claim any time "
    "on our website at ascent admin dot com, under Claims. "
    "Have your contract number and the date of loss ready. "
    "Did that help, or would you like to speak with a claims representative?"
)

CLOSING_MESSAGE = (
    "Great, I'm glad I could help. "
    "Thank you for calling Ascent Administrative Services. Goodbye."
)

CLAIMS_TRANSFER_MESSAGE = (
    "No problem. I'm transferring you to our claims department now. "
    "Please stay on the line."
)

ONBOARDING_TRANSFER_MESSAGE = (
    "Thank you. I'm transferring you to our agent and dealer support team now. "
    "Please stay on the line."
)

RECEPTION_TRANSFER_MESSAGE = (
    "Thank you. Let me transfer you to our reception team, "
    "who will be happy to help. Please stay on the line."
)
