"""Terminal dashboard: pure state machine (``state``) and Textual shell (``app``)."""
