"""Assessment runner state machine and result hand-off."""
