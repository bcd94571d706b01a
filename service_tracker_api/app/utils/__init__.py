"""
Pure helpers shared by the service layer: phone number recognition
and money/date formatting.
"""
