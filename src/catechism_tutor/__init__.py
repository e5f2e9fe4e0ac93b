"""Bilingual catechism tutor: browse, quiz and Q&A context."""
