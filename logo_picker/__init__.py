"""Guess-the-car-logo trivia game: quiz engine, catalog API and Streamlit UI."""

__version__ = "0.1.0"
