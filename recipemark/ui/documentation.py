import streamlit as st


def render_documentation() -> None:
    st.header("📚 Documentation")
    st.markdown(
        """
A short map of how recipe text becomes annotated HTML, and where to extend it.
"""
    )

    st.divider()
    st.subheader("✅ Quickstart")
    st.markdown(
        """
- **Start the app:** `python run.py` (or run API + UI separately).
- **Open the UI:** `http://127.0.0.1:8501`.
- **Write a recipe** in the editor; the rendered view updates on every change.
- **Toggles:** metric equivalents and friendly rounding can be switched per request.
"""
    )

    st.markdown(
        """
Environment setup:
- `RECIPEMARK_CONVERT_TO_METRIC`, `RECIPEMARK_ROUND_SATISFYING` set the server defaults.
- `RECIPEMARK_ROUNDING_TOLERANCE` (between 0 and 1, default `0.05`).
- `RECIPEMARK_INGREDIENT_DATABASE` points to a custom ingredient list.
- `RECIPEMARK_LOG_LEVEL` (e.g. `DEBUG` to see skipped matches).
- `API_URL` / `API_DOCS_URL` override Streamlit links.
- Defaults live in `config/render_config.json`.
"""
    )

    st.subheader("🧠 What happens to a list item?")
    st.markdown(
        """
1. **Inline Markdown** (bold, italic, images) is converted first
   (`recipemark/services/markdown_renderer.py`).
2. **Quantities** like `1/2 cup` or `350°F` are wrapped, and US units get a metric
   equivalent (`recipemark/services/quantity_scanner.py`, `recipemark/services/unit_catalog.py`).
3. **Friendly rounding** turns `118.3 ml` into `120 ml` (`recipemark/utils/rounding.py`).
4. **Durations** like `35-40 minutes` carry their length in seconds, lower bound for ranges
   (`recipemark/services/duration_scanner.py`).
5. **Ingredients** from `recipemark/data/ingredients-en.txt` are highlighted, longest names first
   (`recipemark/services/ingredient_matcher.py`).

Headings, paragraphs and blockquotes are rendered without annotations.
"""
    )

    st.subheader("🧾 Ingredient list format")
    st.markdown(
        """
- One pattern per line; `#` starts a comment.
- `almond~` matches *almond* and *almonds*.
- `gorgonzola [cheese]` matches with or without *cheese*.
"""
    )
