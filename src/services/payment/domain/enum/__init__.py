from .session_state import SessionState as SessionState
