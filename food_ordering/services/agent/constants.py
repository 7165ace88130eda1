"""Agent and dialogue constants."""

# Spoken when the agent answers without a reply
FALLBACK_REPLY = "Sorry, I couldn't process that right now. Could you please say it again?"

# Silence handling prompts
REPEAT_PROMPT = "Sorry, I didn't hear you. Can you please repeat that?"
GOODBYE_PROMPT = "It seems we are having trouble hearing you. Ending the call now. Thank you!"
