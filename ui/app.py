"""Streamlit UI for document validation - upload and review screens.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging  # noqa: E402

import streamlit as st  # noqa: E402

from backend.app.config import get_settings  # noqa: E402
from backend.app.models.uploads import UploadedDocument  # noqa: E402
from ui.helpers import (  # noqa: E402
    ACCEPTED_EXTENSIONS,
    NO_STORYLINE,
    ReviewSelection,
    StagingArea,
    UploadError,
    build_document_view,
    build_suggestions_view,
    call_validate_docs,
    format_file_size,
    session_credentials,
)

logger = logging.getLogger(__name__)

# Configuration
BACKEND_URL = get_settings().backend_url

# Page config
st.set_page_config(
    page_title="Document Validation System",
    page_icon="📄",
    layout="wide",
)

# Initialize session state
if "screen" not in st.session_state:
    st.session_state.screen = "home"
if "staging" not in st.session_state:
    st.session_state.staging = StagingArea()
if "selection" not in st.session_state:
    st.session_state.selection = None
if "result_generation" not in st.session_state:
    st.session_state.result_generation = 0
if "uploader_key" not in st.session_state:
    st.session_state.uploader_key = 0
if "form_generation" not in st.session_state:
    st.session_state.form_generation = 0
if "pending" not in st.session_state:
    st.session_state.pending = False
if "error" not in st.session_state:
    st.session_state.error = None
if "notice" not in st.session_state:
    st.session_state.notice = None


def go_to(screen: str) -> None:
    st.session_state.screen = screen
    st.session_state.error = None


def reset_upload_form() -> None:
    st.session_state.staging.clear()
    st.session_state.form_generation += 1
    st.session_state.uploader_key += 1


# Title
st.title("📄 Document Validation System")
st.markdown("*Upload and validate identity documents for family verification*")
st.divider()

if st.session_state.notice:
    st.success(st.session_state.notice)
    st.session_state.notice = None

# =============================================================================
# HOME
# =============================================================================
if st.session_state.screen == "home":
    st.subheader("📤 Ready to Validate Documents")
    st.markdown("Click the button below to start uploading documents for validation")

    if st.button("➕ Upload Documents", type="primary"):
        go_to("upload")
        st.rerun()

# =============================================================================
# UPLOAD
# =============================================================================
elif st.session_state.screen == "upload":
    staging: StagingArea = st.session_state.staging
    pending = st.session_state.pending

    st.subheader("Upload Documents")

    family_id = st.text_input(
        "Family ID",
        key=f"family_id_{st.session_state.form_generation}",
        placeholder="Enter family ID (e.g., 8480995)",
        help="Required for document validation",
        disabled=pending,
    )

    picked = st.file_uploader(
        "Drag and drop files here or click to browse",
        type=ACCEPTED_EXTENSIONS,
        accept_multiple_files=True,
        key=f"uploader_{st.session_state.uploader_key}",
        help="Supported formats: JPG, PNG, PDF (Max 10MB each)",
        disabled=pending,
    )

    if picked:
        rejected = staging.add(
            UploadedDocument(filename=f.name, content_type=f.type or "", data=f.getvalue())
            for f in picked
        )
        for filename, reason in rejected:
            st.warning(f"Skipped {filename}: {reason}")
        # New uploader widget so the same files are not staged twice
        st.session_state.uploader_key += 1
        if not rejected:
            st.rerun()

    if len(staging):
        st.markdown("#### Selected Files")
        for position, doc in enumerate(staging.files):
            col_name, col_remove = st.columns([6, 1])
            with col_name:
                st.markdown(f"📎 **{doc.filename}**")
                st.caption(format_file_size(doc.size))
            with col_remove:
                if st.button("✖", key=f"remove_{position}", disabled=pending):
                    staging.remove(position)
                    st.rerun()

    col_submit, col_cancel = st.columns([3, 1])
    with col_submit:
        submitted = st.button(
            "⏳ Processing..." if pending else "🚀 Upload & Validate",
            type="primary",
            disabled=pending,
            use_container_width=True,
        )
    with col_cancel:
        cancelled = st.button("Cancel", disabled=pending, use_container_width=True)

    if cancelled:
        reset_upload_form()
        go_to("home")
        st.rerun()

    if submitted:
        st.session_state.pending = True
        st.session_state.error = None
        st.rerun()

    if pending:
        with st.spinner("Validating documents..."):
            headers, cookies = session_credentials(st.context.headers, st.context.cookies)
            try:
                result = call_validate_docs(
                    backend_url=BACKEND_URL,
                    family_id=family_id,
                    files=staging.files,
                    headers=headers,
                    cookies=cookies,
                )
            except UploadError as e:
                # Staged files stay so the user can retry
                st.session_state.error = e.message
            else:
                st.session_state.selection = ReviewSelection(result)
                st.session_state.result_generation += 1
                st.session_state.notice = "Documents validated successfully"
                reset_upload_form()
                go_to("results")
            finally:
                st.session_state.pending = False
        st.rerun()

    if st.session_state.error:
        st.error(f"❌ Upload Failed: {st.session_state.error}")

# =============================================================================
# RESULTS
# =============================================================================
elif st.session_state.screen == "results" and st.session_state.selection is not None:
    selection: ReviewSelection = st.session_state.selection
    ai_result = selection.result.ai_validation_result
    generation = st.session_state.result_generation

    st.subheader("Validation Results")

    tab_summary, tab_storyline = st.tabs(["Validation Summary", "Document Storyline"])
    with tab_summary:
        st.markdown("#### Validation Summary")
        st.markdown(ai_result.summary)
    with tab_storyline:
        st.markdown("#### Inferred Storyline")
        st.text(ai_result.storyline or NO_STORYLINE)

    st.markdown("### Document Validation Results")
    for position, doc in enumerate(ai_result.validations):
        view = build_document_view(position, doc)
        with st.container(border=True):
            col_check, col_type = st.columns([3, 1])
            with col_check:
                checked = st.checkbox(
                    f"**{view['file_name']}**",
                    value=selection.is_selected(position),
                    key=f"doc_{generation}_{position}",
                )
                selection.set_selected(position, checked)
                st.markdown(view["badge_label"])
            with col_type:
                st.caption("Document Type")
                st.markdown(f"**{view['document_type']}**")

            col_reason, col_fraud = st.columns(2)
            with col_reason:
                st.markdown("**Validation Details**")
                st.caption(view["reason"])
            with col_fraud:
                st.markdown(
                    f"**Fraud Risk:** :{view['fraud_risk_color']}[{view['fraud_risk'].capitalize()}]"
                )
                st.caption(view["fraud_notes"])

    unclassified = selection.result.unclassified_files
    if unclassified:
        st.markdown("### Unclassified Files")
        st.caption("The following files could not be classified and will not be uploaded:")
        for file_name in unclassified:
            st.markdown(f"❌ {file_name}")

    st.markdown("### Suggested Additional Documents")
    for row in build_suggestions_view(ai_result.suggestions):
        if row["informational"]:
            st.caption(f"{row['icon']} {row['text']}")
        else:
            st.markdown(f"{row['icon']} **{row['text']}**")

    st.divider()
    col_proceed, col_more, col_cancel = st.columns(3)
    with col_proceed:
        if st.button("Proceed with Selected Files", type="primary", use_container_width=True):
            chosen = selection.selected()
            logger.info(f"Proceeding with documents: {chosen}")
            st.session_state.notice = (
                f"Proceeding with {len(chosen)} selected document{'s' if len(chosen) != 1 else ''}"
            )
            st.session_state.selection = None
            go_to("home")
            st.rerun()
    with col_more:
        if st.button("Upload More Documents", use_container_width=True):
            st.session_state.selection = None
            go_to("upload")
            st.rerun()
    with col_cancel:
        if st.button("Cancel", use_container_width=True):
            go_to("home")
            st.rerun()

else:
    go_to("home")
    st.rerun()
