"""CSS styles for the quote form - wine-cellar branding."""

import streamlit as st


def apply_quote_styles():
    """Apply the quote form styles."""
    st.markdown(
        """
        <style>
        /* Main container padding and width */
        .main {
            max-width: 1200px;
            margin: 0 auto;
        }

        .block-container {
            padding-top: 1rem !important;
            padding-bottom: 1rem !important;
        }

        /* Headers */
        h1 {
            color: #7C4A1E;
            border-bottom: 3px solid #7C4A1E;
            padding-bottom: 10px;
        }

        h2, h3 {
            color: #7C4A1E;
            margin-top: 20px;
        }

        /* Live subtotal */
        .subtotal-box {
            background-color: #F7EFE6;
            border-left: 4px solid #7C4A1E;
            padding: 0.75em 1em;
            border-radius: 0.5em;
            margin: 1em 0;
            font-size: 1.1em;
            font-weight: bold;
            text-align: right;
        }

        /* Rendered quotation */
        .preview-frame {
            background: #FFFFFF;
            border: 1px solid #E0E0E0;
            border-radius: 8px;
            padding: 1.5em;
            box-shadow: 0 4px 12px rgba(0, 0, 0, 0.06);
        }

        /* Primary buttons */
        .stButton > button[kind="primary"],
        .stDownloadButton > button[kind="primary"] {
            background-color: #7C4A1E;
            color: white;
            font-weight: bold;
            border-radius: 6px;
            border: none;
        }

        .stButton > button[kind="primary"]:hover,
        .stDownloadButton > button[kind="primary"]:hover {
            background-color: #5A3415;
        }

        /* Secondary buttons */
        .stButton > button {
            border-radius: 6px;
        }

        hr {
            border: none;
            border-top: 2px solid #E0E0E0;
            margin: 1.5em 0;
        }

        .subtitle {
            color: #666;
            font-size: 1.1em;
            margin-bottom: 1em;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def apply_header_style(title: str, subtitle: str = ""):
    """
    Page header with an optional subtitle.

    Args:
        title: Page title
        subtitle: Subtitle (optional)
    """
    st.markdown(f"# {title}")
    if subtitle:
        st.markdown(f'<p class="subtitle">{subtitle}</p>', unsafe_allow_html=True)
    st.markdown("---")
