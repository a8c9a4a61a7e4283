# =============================================================================
# Staff Management UI Components
# =============================================================================

import streamlit as st

from core.services import Services
from ui.session import current_actor, run_action

def staff_panel(services: Services) -> None:
    """Administrator panel: add, rename and remove reception staff."""
    st.header("👥 スタッフ管理")

    members = services.staff.members()
    st.metric("登録スタッフ", len(members))

    with st.form("add_staff_form", clear_on_submit=True):
        col1, col2 = st.columns([3, 1])
        with col1:
            name = st.text_input("氏名", placeholder="例: 高橋 次郎")
        with col2:
            color = st.color_picker("表示色", value="#8B5CF6")
        use_palette = st.checkbox("表示色を自動で割り当てる", value=True)
        if st.form_submit_button("➕ スタッフを追加", type="primary"):
            ok = run_action(
                lambda: services.staff.add(name, current_actor(), color=None if use_palette else color),
                success=f"{name} を追加しました",
            )
            if ok:
                st.rerun()

    st.markdown("---")

    for member in members:
        col1, col2, col3, col4 = st.columns([0.3, 3, 1, 1])
        with col1:
            st.markdown(
                f"<div style='width:18px;height:18px;border-radius:50%;background:{member.color};"
                f"margin-top:8px'></div>",
                unsafe_allow_html=True,
            )
        with col2:
            new_name = st.text_input(
                "氏名", value=member.name, key=f"staff_name_{member.id}", label_visibility="collapsed",
            )
        with col3:
            if st.button("💾 更新", key=f"rename_{member.id}", disabled=new_name.strip() == member.name):
                if run_action(lambda: services.staff.rename(member.id, new_name, current_actor()),
                              success="氏名を更新しました"):
                    st.rerun()
        with col4:
            if st.button("🗑️ 削除", key=f"remove_staff_{member.id}"):
                if run_action(lambda: services.staff.remove(member.id, current_actor()),
                              success=f"{member.name} を削除しました"):
                    st.rerun()
