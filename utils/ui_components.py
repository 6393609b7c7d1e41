"""Shared UI components: concept boxes, quizzes, chapter navigation."""
import streamlit as st

from utils.constants import CHAPTERS, PART_TITLES


def chapter_header(number):
    """Render a chapter header with its part label, looked up from the chapter table."""
    title, part, _ = CHAPTERS[number]
    st.caption(f"Part {part}: {PART_TITLES[part]}")
    st.title(f"Chapter {number}: {title}")
    st.divider()


def concept_box(title, content):
    """Render a highlighted concept/theory box."""
    st.markdown(f"""
<div style="background-color: #EBF5FB; padding: 20px; border-radius: 10px; border-left: 5px solid #2E86C1; margin: 10px 0;">
<h4 style="color: #2E86C1; margin-top: 0;">{title}</h4>
<p style="color: #1B4F72;">{content}</p>
</div>
""", unsafe_allow_html=True)


def formula_box(title, formula, explanation=""):
    """Render a formula with explanation."""
    st.markdown(f"**{title}**")
    st.latex(formula)
    if explanation:
        st.caption(explanation)


def insight_box(text):
    st.info(f"**Key Insight:** {text}")


def warning_box(text):
    st.warning(f"**Common Mistake:** {text}")


def error_box(error, hint=""):
    """Show why a computation could not run and halt the rest of the page."""
    st.error(f"**Cannot continue:** {error}")
    if hint:
        st.caption(hint)
    st.stop()


def code_example(code, language="python"):
    """Render a collapsible code example."""
    with st.expander("Show Code"):
        st.code(code, language=language)


def quiz(question, options, correct_idx, explanation="", key="quiz"):
    """Render a multiple-choice quiz question. Returns True if answered correctly."""
    st.subheader("Quick Quiz")
    answer = st.radio(question, options, key=key, index=None)
    if answer is None:
        return None
    correct = options.index(answer) == correct_idx
    if correct:
        st.success("Correct!")
    else:
        st.error(f"Not quite. The correct answer is: **{options[correct_idx]}**")
    if explanation:
        st.caption(explanation)
    return correct


def takeaways(points):
    """Render key takeaways as a list."""
    st.subheader("Key Takeaways")
    for p in points:
        st.markdown(f"- {p}")


def navigation(number):
    """Render prev/next links to the neighbouring chapters."""
    col1, _, col3 = st.columns([1, 2, 1])
    with col1:
        if number - 1 in CHAPTERS:
            title, _, page = CHAPTERS[number - 1]
            st.page_link(f"pages/{page}", label=f"← {title}")
    with col3:
        if number + 1 in CHAPTERS:
            title, _, page = CHAPTERS[number + 1]
            st.page_link(f"pages/{page}", label=f"{title} →")
