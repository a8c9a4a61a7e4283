"""
Data Status Display Component for the Shift Request Calendar
Shows the month summary, CSV export and where the data is stored
"""
import os
from datetime import datetime

import streamlit as st

from core.export import shifts_dataframe, staff_summary, to_csv_bytes
from core.services import Services
from core.state import AppState
from core.utils import month_key
from models.constants import BACKEND_JSON, COLLECTION_ORDER
from models.data_models import AppSettings

def render_data_status(services: Services, state: AppState, settings: AppSettings) -> None:
    """Render the monthly summary, export and storage status."""
    st.subheader("📊 集計")

    shifts = services.shifts.shifts_for_month(state.year, state.month)
    members = services.staff.members()

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("👥 スタッフ", len(members))
    with col2:
        st.metric("📅 今月の希望", len(shifts))
    with col3:
        st.metric("♻️ 削除履歴", len(services.shifts.deleted_shifts()))

    st.dataframe(staff_summary(shifts, members), use_container_width=True)

    df = shifts_dataframe(shifts, services.staff.name_of)
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.download_button(
        label="📤 CSV をダウンロード",
        data=to_csv_bytes(df),
        file_name=f"shift_requests_{month_key(state.year, state.month)}.csv",
        mime="text/csv",
        disabled=df.empty,
    )

    st.subheader("💾 データ保存先")
    st.write(f"バックエンド: **{settings.backend}**")
    if settings.backend == BACKEND_JSON:
        latest_time = None
        for name in COLLECTION_ORDER:
            path = os.path.join(settings.data_dir, f"{name}.json")
            if os.path.exists(path):
                file_time = os.path.getmtime(path)
                if latest_time is None or file_time > latest_time:
                    latest_time = file_time
        if latest_time:
            st.info(f"📅 最終保存: {datetime.fromtimestamp(latest_time).strftime('%m/%d %H:%M')}")
        else:
            st.info("📅 まだ保存されたデータはありません")
