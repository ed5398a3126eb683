from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Optional

APP_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = APP_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import streamlit as st

from logo_picker import config
from logo_picker.client import ApiClient, ApiError
from logo_picker.quiz import QuizSession, QuizState


st.set_page_config(
    page_title="Logo Picker",
    page_icon=":racing_car:",
    layout="centered",
)

DIFFICULTY_CHOICES = [
    ("easy", "Easy · famous badges, 5 pts"),
    ("medium", "Medium · blurred, 10 pts"),
    ("hard", "Hard · heavy blur, 15 pts"),
    ("impossible", "Impossible · type the name, 20 pts"),
]


@st.cache_resource(show_spinner=False)
def get_client() -> ApiClient:
    return ApiClient()


def _fresh_state(difficulty: str = config.DEFAULT_DIFFICULTY) -> Dict[str, object]:
    return {
        "session": None,
        "difficulty": difficulty,
        "load_error": None,
        "submit_error": None,
        "saved": False,
    }


def get_game_state() -> Dict[str, object]:
    if "game" not in st.session_state:
        st.session_state.game = _fresh_state()
    return st.session_state.game


def reset_game_state(difficulty: str = config.DEFAULT_DIFFICULTY) -> None:
    st.session_state.game = _fresh_state(difficulty)


def start_new_game(difficulty: str) -> None:
    reset_game_state(difficulty)
    game_state = get_game_state()

    # The hardest tier draws from the whole catalog.
    difficulty_filter = None if difficulty == config.FREE_TEXT_DIFFICULTY else difficulty
    try:
        with st.spinner("Loading logos..."):
            brands = get_client().list_brands(difficulty_filter, config.DEFAULT_BRAND_LIMIT)
        game_state["session"] = QuizSession(brands, difficulty=difficulty)
    except (ApiError, ValueError) as exc:
        game_state["load_error"] = str(exc)


def record_answer(candidate: str) -> None:
    session: Optional[QuizSession] = get_game_state()["session"]
    if session is None or session.state is not QuizState.PLAYING:
        return
    session.submit_answer(candidate)


def next_round() -> None:
    session: Optional[QuizSession] = get_game_state()["session"]
    if session is None or session.state is not QuizState.REVEALED:
        return
    session.advance()


def save_score(player_name: str) -> None:
    game_state = get_game_state()
    session: QuizSession = game_state["session"]
    game_state["submit_error"] = None
    try:
        with st.spinner("Submitting..."):
            get_client().submit_score(player_name, session.score, session.difficulty)
    except ApiError as exc:
        game_state["submit_error"] = exc.message
        return
    game_state["saved"] = True


def render_sidebar() -> Dict[str, object]:
    with st.sidebar:
        st.header("New game")

        difficulty_labels = {key: label for key, label in DIFFICULTY_CHOICES}
        difficulty_keys = [item[0] for item in DIFFICULTY_CHOICES]

        difficulty_choice = st.selectbox(
            "Difficulty",
            options=difficulty_keys,
            format_func=lambda key: difficulty_labels[key],
            index=difficulty_keys.index(config.DEFAULT_DIFFICULTY),
        )

        start_requested = st.button("Start engine", type="primary")

        st.markdown("---")
        render_leaderboard()

    return {
        "difficulty": difficulty_choice,
        "start_requested": start_requested,
    }


def render_leaderboard() -> None:
    st.subheader("Hall of fame")
    try:
        scores = get_client().list_scores()
    except ApiError as exc:
        st.caption(f"Leaderboard unavailable: {exc.message}")
        return

    if not scores:
        st.caption("No records yet. Be the first!")
        return

    rows = [
        {
            "rank": idx,
            "driver": entry["playerName"],
            "score": entry["score"],
            "difficulty": entry["difficulty"],
        }
        for idx, entry in enumerate(scores, 1)
    ]
    st.dataframe(rows, width="stretch", hide_index=True)


def render_load_error(message: str, difficulty: str) -> None:
    st.error(f"Could not load the garage: {message}")
    if st.button("Retry", type="primary"):
        start_new_game(difficulty)
        st.rerun()


def render_scoreboard(session: QuizSession) -> None:
    score_col, round_col, lives_col = st.columns(3)
    score_col.metric("Score", session.score)
    round_col.metric("Logo", f"{session.position + 1} / {session.total_rounds}")
    lives_col.metric("Lives", ":heart:" * session.lives or "0")
    st.progress(session.position / session.total_rounds)


def render_round(session: QuizSession) -> None:
    render_scoreboard(session)

    brand = session.current_brand
    st.image(get_client().logo_url(brand.id, session.blur_level), width="stretch")

    if session.state is QuizState.REVEALED and session.last_result is not None:
        result = session.last_result
        if result.is_correct:
            st.success(f"Correct! It's {result.expected}. +{result.points} points")
        else:
            st.error(f"Wrong! It was {result.expected}.")
        if st.button("Next logo", type="primary"):
            next_round()
            st.rerun()
        return

    if session.multiple_choice:
        columns = st.columns(2, gap="medium")
        for idx, option in enumerate(session.options):
            target_column = columns[idx % 2]
            if target_column.button(
                option.name,
                key=f"option_{session.position}_{option.id}",
                width="stretch",
            ):
                record_answer(option.name)
                st.rerun()
        return

    with st.form(key=f"answer_{session.position}", clear_on_submit=True):
        answer = st.text_input("Brand name", placeholder="TYPE BRAND NAME...")
        if st.form_submit_button("Submit", type="primary") and answer.strip():
            record_answer(answer)
            st.rerun()


def render_game_over(session: QuizSession) -> None:
    game_state = get_game_state()
    summary = session.summary()

    st.header("Game over")
    if session.last_result is not None and not session.last_result.is_correct:
        st.caption(f"The last logo was {session.last_result.expected}.")
    st.markdown(
        f"- Difficulty: **{summary['difficulty']}**\n"
        f"- Final score: **{summary['score']}**\n"
        f"- Correct answers: **{summary['correct']} / {summary['rounds_played']}**"
    )

    if game_state["saved"]:
        st.success("Record saved to the hall of fame.")
    else:
        with st.form(key="save_score"):
            player_name = st.text_input(
                "Driver name",
                max_chars=config.PLAYER_NAME_MAX_LENGTH,
                placeholder="ENTER DRIVER NAME",
            )
            if st.form_submit_button("Save record", type="primary"):
                save_score(player_name)
                st.rerun()
        if game_state["submit_error"]:
            st.error(game_state["submit_error"])

    if st.button("Play again"):
        start_new_game(session.difficulty)
        st.rerun()


def main() -> None:
    st.title("Logo Picker")
    st.write("Name the car brand behind each logo. Three wrong answers and you're out.")

    controls = render_sidebar()
    game_state = get_game_state()

    if controls["start_requested"]:
        start_new_game(controls["difficulty"])
        st.rerun()

    if game_state["load_error"]:
        render_load_error(game_state["load_error"], game_state["difficulty"])
        st.stop()

    session: Optional[QuizSession] = game_state["session"]
    if session is None:
        st.info("Pick a difficulty on the left and press 'Start engine' to begin.")
        st.stop()

    if session.finished:
        render_game_over(session)
        st.stop()

    render_round(session)


if __name__ == "__main__":
    main()
