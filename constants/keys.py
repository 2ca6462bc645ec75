class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    ANSWERS = "questionnaire.answers"
    NAVIGATION = "questionnaire.navigation"
    SAVE_STATUS = "questionnaire.save_status"
    SAVED_ID = "questionnaire.saved_id"
    SESSION_ID = "questionnaire.session_id"
    USER = "user"
