"""
NPS Feedback Analysis Application
Streamlit-based batch application for labelling and exploring survey comments.
"""

import streamlit as st
import pandas as pd
import plotly.express as px
from datetime import datetime

from feedback_batch_processor import (
    FeedbackBatchProcessor,
    BatchResult,
    available_filter_values,
    errors_to_dataframe,
    export_csv,
    filter_records,
    generate_summary,
)
from feedback_engine.config.classifier_config import CLASSIFIER_CONFIG


# Page configuration
st.set_page_config(
    page_title="NPS Feedback Analysis",
    page_icon="💬",
    layout="wide",
    initial_sidebar_state="expanded"
)

BAND_EMOJI = {
    "Excellent": "🤩",
    "Very Good": "😀",
    "Good": "🙂",
    "Needs Work": "😐",
    "Critical": "😞",
}

COMMENT_TYPE_COLORS = {
    "Constructive": "#28a745",
    "Non-constructive": "#dc3545",
    "General": "#6c757d",
    "No Comment": "#adb5bd",
}


def main():
    """Main application entry point."""

    # Initialize session state for cumulative batch processing
    if "cumulative_mode" not in st.session_state:
        st.session_state["cumulative_mode"] = False
    if "batch_count" not in st.session_state:
        st.session_state["batch_count"] = 0
    if "processed_filenames" not in st.session_state:
        st.session_state["processed_filenames"] = set()

    st.title("💬 MSSQL Extension - NPS Analysis")
    st.markdown("Rule-based triage of survey comments by **category**, **area**, **user type** and **comment type**")

    with st.sidebar:
        st.header("⚙️ Configuration")
        comment_column = st.text_input(
            "Comment column",
            value=CLASSIFIER_CONFIG["columns"]["comment"],
            help="CSV column holding the free-text comment"
        )

        st.divider()
        st.markdown("### 📊 NPS Buckets")
        st.markdown("""
        - **Promoters**: 9-10
        - **Passives**: 7-8
        - **Detractors**: 0-6
        """)

    tab1, tab2 = st.tabs(["📤 Upload & Process", "📊 Results Dashboard"])

    with tab1:
        render_upload_tab(comment_column)

    with tab2:
        render_results_tab()


def render_upload_tab(comment_column: str):
    """Render the upload and processing tab."""

    st.header("📤 Upload Survey Exports")

    col1, col2 = st.columns([2, 1])

    with col1:
        cumulative_mode = st.checkbox(
            "**Add to Results** (Cumulative Mode)",
            value=st.session_state.get("cumulative_mode", False),
            help="When enabled, new uploads are added to existing results instead of replacing them."
        )
        st.session_state["cumulative_mode"] = cumulative_mode

    with col2:
        if st.button("Clear All Results", type="secondary", use_container_width=True):
            st.session_state["batch_result"] = None
            st.session_state["batch_count"] = 0
            st.session_state["processed_filenames"] = set()
            st.success("✅ All results cleared!")
            st.rerun()

    uploaded_files = st.file_uploader(
        "Choose CSV files",
        type=["csv"],
        accept_multiple_files=True
    )

    if uploaded_files and st.button("🚀 Process Feedback", type="primary"):
        process_uploads(uploaded_files, comment_column)


def process_uploads(uploaded_files: list, comment_column: str):
    """Label uploaded CSV files and store the result in session state."""

    processor = FeedbackBatchProcessor(comment_column=comment_column)
    files = [(f.name, f.getvalue()) for f in uploaded_files]

    cumulative_mode = st.session_state.get("cumulative_mode", False)
    existing = st.session_state.get("batch_result") if cumulative_mode else None

    duplicates = {name for name, _ in files} & st.session_state.get("processed_filenames", set())
    if existing is not None and duplicates:
        st.warning(f"⚠️ Already processed: {', '.join(sorted(duplicates))}")

    progress_bar = st.progress(0)
    status_text = st.empty()

    def update_progress(current: int, total: int, message: str):
        progress_bar.progress(current / total)
        status_text.text(f"[{current}/{total}] {message}")

    # IDs continue from the existing records in cumulative mode
    start_id = len(existing.records) + 1 if existing is not None else 1
    new_result = processor.process_batch(files, progress_callback=update_progress, start_id=start_id)

    progress_bar.progress(1.0)
    status_text.text(
        f"✅ Processing complete: {new_result.stats.successful}/{new_result.stats.total_files} files, "
        f"{new_result.stats.total_records} responses"
    )

    if existing is not None:
        st.session_state["batch_result"] = BatchResult.merge_results(existing, new_result)
        st.session_state["batch_count"] = st.session_state.get("batch_count", 0) + 1
        st.session_state["processed_filenames"] |= {name for name, _ in files}
    else:
        st.session_state["batch_result"] = new_result
        st.session_state["batch_count"] = 1
        st.session_state["processed_filenames"] = {name for name, _ in files}

    if new_result.errors:
        with st.expander("⚠️ Error Summary", expanded=True):
            for error_type, count in new_result.error_summary.items():
                st.text(f"• {error_type}: {count}")
            st.dataframe(errors_to_dataframe(new_result.errors), use_container_width=True, hide_index=True)

    st.success("📊 View the analysis in the **Results Dashboard** tab")


def render_results_tab():
    """Render the results dashboard tab."""

    st.header("📊 Results Dashboard")

    result = st.session_state.get("batch_result")
    if result is None or not result.records:
        st.info("👆 Upload and process files in the **Upload & Process** tab first")
        return

    results_df = result.to_dataframe()
    version_column = CLASSIFIER_CONFIG["columns"]["version"]

    version = st.selectbox("Version", available_filter_values(results_df, version_column))
    version_df = filter_records(results_df, version=version)

    # Summary stats are filtered by version only
    summary = generate_summary(version_df.to_dict(orient="records"))
    nps = summary["nps"]

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        st.metric("Total Responses", nps["total"])
    with col2:
        st.metric("Promoters (9-10)", nps["promoters"])
    with col3:
        st.metric("Passives (7-8)", nps["passives"])
    with col4:
        st.metric("Detractors (0-6)", nps["detractors"])
    with col5:
        st.metric("NPS Score", f"{nps['score']} - {BAND_EMOJI.get(nps['band'], '')} {nps['band']}")

    col1, col2 = st.columns(2)

    with col1:
        breakdown = pd.DataFrame(summary["category_breakdown"])
        fig_categories = px.bar(
            breakdown,
            x="count",
            y="category",
            orientation="h",
            text="percentage",
            title="Category Breakdown",
            labels={"count": "Responses", "category": "Category"}
        )
        st.plotly_chart(fig_categories, use_container_width=True)

    with col2:
        comment_types = version_df["CommentType"].value_counts()
        fig_pie = px.pie(
            values=comment_types.values,
            names=comment_types.index,
            title="Comment Type Distribution",
            color=comment_types.index,
            color_discrete_map=COMMENT_TYPE_COLORS
        )
        st.plotly_chart(fig_pie, use_container_width=True)

    # Detailed Results Table
    st.subheader("📋 Responses")

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        feedback_type = st.selectbox("Feedback Type", ["All", "Promoter", "Passive", "Detractor"])
    with col2:
        category = st.selectbox("Category", available_filter_values(version_df, "Category"))
    with col3:
        area = st.selectbox("Area", available_filter_values(version_df, "Area"))
    with col4:
        user_type = st.selectbox("User Type", available_filter_values(version_df, "UserType"))
    with col5:
        comment_type = st.selectbox("Comment Type", available_filter_values(version_df, "CommentType"))

    filtered_df = filter_records(
        version_df,
        feedback_type=feedback_type,
        category=category,
        area=area,
        user_type=user_type,
        comment_type=comment_type
    )

    st.caption(f"Showing {len(filtered_df)} of {len(results_df)} responses")
    st.dataframe(
        filtered_df.drop(columns=["CategoryExplain"], errors="ignore"),
        use_container_width=True,
        hide_index=True
    )

    st.download_button(
        label="📥 Download Filtered CSV",
        data=export_csv(filtered_df),
        file_name=f"enhanced_nps_feedback_filtered_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv",
        mime="text/csv"
    )


if __name__ == "__main__":
    main()
