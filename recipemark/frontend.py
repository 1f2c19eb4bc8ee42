import streamlit as st
import requests
import os

from recipemark.ui.documentation import render_documentation

# Configuration
API_URL = os.getenv("API_URL", "http://127.0.0.1:8000/api/render")
API_DOCS_URL = os.getenv("API_DOCS_URL", "http://127.0.0.1:8000/docs")

SAMPLE_RECIPE = """# Pasta with Gorgonzola

A quick weeknight dinner.

## Ingredients
- 1/2 cup milk
- 8 oz spaghetti
- 4 oz gorgonzola cheese
- 1 tbsp olive oil
- a pinch of red pepper flakes

## Steps
1. Boil the spaghetti for 10 to 12 minutes.
2. Warm the milk and gorgonzola for 3-4 minutes.
3. Toss with olive oil and serve.
"""

# Styling for the annotation spans returned by the API
ANNOTATION_CSS = """
<style>
.quantity { background: #fff3bf; border-radius: 4px; padding: 0 3px; }
.quantity-metric { color: #868e96; font-size: 0.9em; }
.duration { background: #d0ebff; border-radius: 4px; padding: 0 3px; }
.ingredient { font-weight: 600; color: #2b8a3e; }
</style>
"""

st.set_page_config(page_title="Recipe Markdown", layout="wide")

col1, col2 = st.columns([5, 1])
with col1:
    st.title("Recipe Markdown Annotator")
with col2:
    st.link_button("API Docs", API_DOCS_URL, type="secondary", use_container_width=True)

edit_tab, docs_tab = st.tabs(["Recipe", "Documentation"])

with edit_tab:
    c1, c2 = st.columns(2)
    with c1:
        markdown = st.text_area("Edit your recipe:", value=SAMPLE_RECIPE, height=420)
        convert_to_metric = st.toggle("Show metric equivalents", value=True)
        round_satisfying = st.toggle("Round to friendly numbers", value=True)

    with c2:
        if not markdown.strip():
            st.info("Write a recipe on the left to see it rendered here.")
        else:
            try:
                response = requests.post(API_URL, json={
                    "markdown": markdown,
                    "convert_to_metric": convert_to_metric,
                    "round_satisfying": round_satisfying
                }, timeout=10)

                if response.status_code == 200:
                    st.markdown(ANNOTATION_CSS + response.json()["html"], unsafe_allow_html=True)
                    with st.expander("📋 Raw HTML", expanded=False):
                        st.code(response.json()["html"], language="html")
                else:
                    st.error(f"Error {response.status_code}: {response.text}")

            except requests.exceptions.ConnectionError:
                st.error("Could not connect to the API. Is the backend running? (`uvicorn recipemark.main:app`)")
            except requests.exceptions.RequestException as e:
                st.error(f"An error occurred: {str(e)}")

with docs_tab:
    render_documentation()
