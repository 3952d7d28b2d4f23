"""Rendered quotation preview and export buttons."""

import streamlit as st
from typing import Any, Dict

from quote_generator.models import DOCX_MEDIA_TYPE, PDF_MEDIA_TYPE
from quote_generator.services.export_service import export_filename


EXPORTS = (
    ("pdf", "📄 Export PDF", PDF_MEDIA_TYPE),
    ("docx", "📝 Export Word", DOCX_MEDIA_TYPE),
)


def display_quote_preview(html: str) -> None:
    """
    Show the backend-rendered quotation.

    Args:
        html: Document markup from the preview endpoint
    """
    st.markdown(f'<div class="preview-frame">{html}</div>', unsafe_allow_html=True)


def display_export_buttons(client, quote: Dict[str, Any]) -> None:
    """
    Export buttons; each one fetches the file and then offers it for download.

    Args:
        client: APIClient
        quote: Frozen quote snapshot (JSON-compatible dict)
    """
    exports = st.session_state.setdefault("exports", {})
    quote_number = quote.get("quote_number")

    cols = st.columns(len(EXPORTS))
    for col, (fmt, label, media_type) in zip(cols, EXPORTS):
        with col:
            if fmt in exports:
                st.download_button(
                    label=f"⬇️ Download {fmt.upper()}",
                    data=exports[fmt],
                    file_name=export_filename(quote_number, fmt),
                    mime=media_type,
                    type="primary",
                    use_container_width=True,
                )
            elif st.button(label, key=f"export_{fmt}", use_container_width=True):
                with st.spinner(f"Generating {fmt.upper()}..."):
                    try:
                        export = client.export_pdf if fmt == "pdf" else client.export_docx
                        content = export(quote)
                    except Exception as e:
                        st.error(f"❌ {fmt.upper()} export failed: {str(e)}")
                        continue
                if content is None:
                    st.info("Nothing to export yet")
                    continue
                exports[fmt] = content
                st.rerun()
