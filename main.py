"""
main.py  –  Streamlit console for booking tutoring sessions
────────────────────────────────────────────────────────────────
Run with:
    streamlit run main.py

Every widget reports its key as the "pointer target" before acting, so the
popover coordinator can close the overlays a press landed outside of.
"""

from datetime import date

import streamlit as st
from google.auth import exceptions as auth_exceptions

from session_booking import (
    BookingDraft,
    BookingError,
    CalendarView,
    Config,
    LiveCollections,
    PopoverCoordinator,
    StoreGateway,
    StudentForm,
    establish,
    get_client,
    setup_logger,
)
from session_booking import popovers as pop
from session_booking.calendar_engine import WEEKDAY_NAMES, grid_weeks, navigate
from session_booking.models import LECTURERS, SessionStatus
from session_booking.popovers import KeyRegion
from session_booking.roster import (
    DELETE_SESSION_PROMPT,
    DELETE_STUDENT_PROMPT,
    STUDENT_ADDED_MESSAGE,
    delete_session,
    delete_student,
    register_student,
)
from session_booking.students import StudentFilter, find_student
from session_booking.summary import sessions_for_student, summarize
from session_booking.timevalue import HOURS, MINUTES, compose_clock, format_duration, split_clock

SESSIONS_TAB = "sessions"
STUDENTS_TAB = "add-student"
TAB_LABELS = {SESSIONS_TAB: "📅 الحصص", STUDENTS_TAB: "👤 الطلاب"}


# ───────────────────────────────────────────────────────────────
# 1.  One-time bootstrap: config, logging, identity, listeners
# ───────────────────────────────────────────────────────────────
@st.cache_resource
def bootstrap():
    config = Config()
    config.validate()
    logger = setup_logger(level=config.log_level_value, log_file=config.log_file)

    identity = establish(config)
    live = LiveCollections()
    gateway = None
    try:
        gateway = StoreGateway(get_client(config.gcp_project), config.app_id)
    except auth_exceptions.DefaultCredentialsError as e:
        logger.error("Firestore client unavailable: %s", e)
        live.loading = False
        return None, None, live
    if identity is not None:
        live.start(gateway)
    return identity, gateway, live


identity, gateway, live = bootstrap()


# ───────────────────────────────────────────────────────────────
# 2.  Per-browser UI state
# ───────────────────────────────────────────────────────────────
if "popovers" not in st.session_state:
    popovers = PopoverCoordinator()
    popovers.register(pop.CALENDAR, KeyRegion("calendar:"))
    popovers.register(pop.START_TIME, KeyRegion("start_time:"))
    popovers.register(pop.END_TIME, KeyRegion("end_time:"))
    popovers.register(pop.STUDENT_SEARCH, KeyRegion("student_search:"))
    st.session_state.popovers = popovers
    st.session_state.draft = BookingDraft(popovers)
    st.session_state.calendar_view = CalendarView.containing(date.today())
    st.session_state.active_tab = SESSIONS_TAB
    st.session_state.flash = None
    st.session_state.pending_delete = None

popovers: PopoverCoordinator = st.session_state.popovers
draft: BookingDraft = st.session_state.draft


def _flash(kind, message):
    st.session_state.flash = (kind, message)


def _sync_form_widgets():
    st.session_state["form:subject"] = draft.fields.subject
    st.session_state["form:lecturer"] = draft.fields.lecturer
    st.session_state["student_search:query"] = ""


# ───────────────────────────────────────────────────────────────
# 3.  Callbacks (each one is a pointer press on its widget key)
# ───────────────────────────────────────────────────────────────
def on_press(key):
    popovers.pointer_press(key)


def on_toggle(name, key):
    if name == pop.CALENDAR and not popovers.is_open(name):
        st.session_state.calendar_view = CalendarView.from_iso(draft.fields.date, date.today())
    popovers.press_and_toggle(name, key)


def on_field(field, key):
    popovers.pointer_press(key)
    draft.update(**{field: st.session_state[key]})


def on_month(delta, key):
    popovers.pointer_press(key)
    st.session_state.calendar_view = navigate(st.session_state.calendar_view, delta)


def on_day(value, key):
    popovers.pointer_press(key)
    draft.select_date(value)


def on_clock(field, hour, minute, key):
    popovers.pointer_press(key)
    draft.update(**{field: compose_clock(hour, minute)})


def on_clock_done(name, key):
    popovers.pointer_press(key)
    popovers.close(name)


def on_student(student_id, key):
    popovers.pointer_press(key)
    draft.select_student(student_id)


def on_status(status, key):
    popovers.pointer_press(key)
    draft.set_status(status)


def on_submit(key):
    popovers.pointer_press(key)
    was_editing = draft.is_editing
    try:
        result = draft.submit(gateway, live.students, identity)
    except BookingError as e:
        _flash("error", e.message)
        return
    _sync_form_widgets()
    if was_editing:
        st.session_state.active_tab = SESSIONS_TAB
    _flash("success", result.message)


def on_cancel_edit(key):
    popovers.pointer_press(key)
    draft.cancel_edit()
    _sync_form_widgets()


def on_edit(session, key):
    popovers.pointer_press(key)
    draft.load_for_edit(session)
    _sync_form_widgets()
    st.session_state.active_tab = SESSIONS_TAB


def on_register(key):
    popovers.pointer_press(key)
    form = StudentForm(
        st.session_state["student_form:name"],
        st.session_state["student_form:phone"],
        st.session_state["student_form:email"],
    )
    try:
        register_student(gateway, form, identity)
    except BookingError as e:
        _flash("error", e.message)
        return
    for field in ("name", "phone", "email"):
        st.session_state[f"student_form:{field}"] = ""
    st.session_state.active_tab = SESSIONS_TAB
    _flash("success", STUDENT_ADDED_MESSAGE)


def on_delete(kind, doc_id, key):
    popovers.pointer_press(key)
    st.session_state.pending_delete = (kind, doc_id)


def on_confirm_delete(confirmed, key):
    popovers.pointer_press(key)
    kind, doc_id = st.session_state.pending_delete
    st.session_state.pending_delete = None
    if not confirmed or gateway is None:
        return
    try:
        if kind == "session":
            delete_session(gateway, doc_id)
        else:
            delete_student(gateway, doc_id)
    except BookingError as e:
        _flash("error", e.message)


# ───────────────────────────────────────────────────────────────
# 4.  Booking form widgets
# ───────────────────────────────────────────────────────────────
def render_calendar():
    fields = draft.fields
    st.button(
        f"📅 {fields.date or 'اختر التاريخ'}", key="calendar:trigger",
        on_click=on_toggle, args=(pop.CALENDAR, "calendar:trigger"), use_container_width=True,
    )
    if not popovers.is_open(pop.CALENDAR):
        return
    view = st.session_state.calendar_view
    with st.container(border=True):
        prev_col, title_col, next_col = st.columns([1, 3, 1])
        prev_col.button("›", key="calendar:prev", on_click=on_month, args=(-1, "calendar:prev"))
        title_col.markdown(f"**{view.title}**")
        next_col.button("‹", key="calendar:next", on_click=on_month, args=(1, "calendar:next"))
        for col, name in zip(st.columns(7), WEEKDAY_NAMES):
            col.caption(name)
        for week in grid_weeks(view):
            for col, value in zip(st.columns(7), week):
                if value is None:
                    continue
                key = f"calendar:day:{value}"
                col.button(
                    str(int(value[-2:])), key=key, on_click=on_day, args=(value, key),
                    type="primary" if value == fields.date else "secondary",
                )


def render_time_picker(name, field, title):
    current = getattr(draft.fields, field)
    trigger = f"{name}:trigger"
    st.button(
        f"🕒 {current or title}", key=trigger,
        on_click=on_toggle, args=(name, trigger), use_container_width=True,
    )
    if not popovers.is_open(name):
        return
    hour, minute = split_clock(current)
    with st.container(border=True):
        hours_col, minutes_col = st.columns(2)
        hours_col.caption("ساعة")
        for h in HOURS:
            key = f"{name}:hour:{h}"
            hours_col.button(
                h, key=key, on_click=on_clock, args=(field, h, minute, key),
                type="primary" if h == hour else "secondary",
            )
        minutes_col.caption("دقيقة")
        for m in MINUTES:
            key = f"{name}:minute:{m}"
            minutes_col.button(
                m, key=key, on_click=on_clock, args=(field, hour, m, key),
                type="primary" if m == minute else "secondary",
            )
        st.button("تم", key=f"{name}:done", on_click=on_clock_done, args=(name, f"{name}:done"))


def render_student_search():
    selected = find_student(live.students, draft.fields.student_id)
    st.button(
        selected.name if selected else "ابحث عن اسم الطالب...", key="student_search:trigger",
        on_click=on_toggle, args=(pop.STUDENT_SEARCH, "student_search:trigger"),
        use_container_width=True,
    )
    if not popovers.is_open(pop.STUDENT_SEARCH):
        return
    with st.container(border=True):
        query = st.text_input(
            "بحث بالاسم أو الهاتف", key="student_search:query",
            on_change=on_press, args=("student_search:query",),
        )
        results = StudentFilter(live.students, query)
        if not results:
            st.caption("لا توجد نتائج")
        for student in results:
            key = f"student_search:pick:{student.id}"
            st.button(
                f"{student.name} · {student.phone}", key=key,
                on_click=on_student, args=(student.id, key), use_container_width=True,
            )


def render_booking_form():
    st.subheader("✏️ تعديل الحصة" if draft.is_editing else "➕ حجز حصة جديدة")
    st.text_input("المادة", key="form:subject", on_change=on_field, args=("subject", "form:subject"))
    render_calendar()
    start_col, end_col = st.columns(2)
    with start_col:
        render_time_picker(pop.START_TIME, "start_time", "وقت البداية")
    with end_col:
        render_time_picker(pop.END_TIME, "end_time", "وقت النهاية")
    if draft.duration:
        st.info(f"المدة: {format_duration(draft.duration)}")
    render_student_search()
    st.selectbox(
        "المحاضر", ("",) + LECTURERS, key="form:lecturer",
        format_func=lambda v: v or "اختر المحاضر",
        on_change=on_field, args=("lecturer", "form:lecturer"),
    )
    for col, status in zip(st.columns(len(SessionStatus)), SessionStatus):
        key = f"form:status:{status.name}"
        col.button(
            status.label, key=key, on_click=on_status, args=(status, key),
            type="primary" if draft.fields.status is status else "secondary",
        )
    st.button(
        "تحديث الحصة" if draft.is_editing else "تأكيد الحجز", key="form:submit",
        on_click=on_submit, args=("form:submit",), type="primary", use_container_width=True,
    )
    if draft.is_editing:
        st.button("إلغاء التعديل", key="form:cancel", on_click=on_cancel_edit, args=("form:cancel",))


# ───────────────────────────────────────────────────────────────
# 5.  Listings
# ───────────────────────────────────────────────────────────────
def render_delete_prompt(kind):
    pending = st.session_state.pending_delete
    if not pending or pending[0] != kind:
        return
    st.warning(DELETE_SESSION_PROMPT if kind == "session" else DELETE_STUDENT_PROMPT)
    yes_col, no_col = st.columns(2)
    yes_col.button("نعم", key=f"{kind}:confirm", on_click=on_confirm_delete, args=(True, f"{kind}:confirm"))
    no_col.button("لا", key=f"{kind}:dismiss", on_click=on_confirm_delete, args=(False, f"{kind}:dismiss"))


def render_sessions():
    summary = summarize(live.sessions, live.students)
    cols = st.columns(4)
    cols[0].metric("إجمالي الحصص", summary.total)
    cols[1].metric("منتهية", summary.count(SessionStatus.COMPLETED))
    cols[2].metric("مجدولة", summary.count(SessionStatus.SCHEDULED))
    cols[3].metric("ملغية", summary.count(SessionStatus.CANCELLED))

    render_delete_prompt("session")
    if live.last_error:
        st.warning("تعذر تحديث البيانات من الخادم")
    if live.loading:
        st.info("جاري التحميل...")
        return
    if not live.sessions:
        st.info("لا توجد حصص مسجلة بعد")
        return
    for session in live.sessions:
        with st.container(border=True):
            info_col, edit_col, delete_col = st.columns([6, 1, 1])
            info_col.markdown(
                f"**{session.student_name}** · {session.subject}  \n"
                f"{session.date} · {session.start_time} - {session.end_time} "
                f"({format_duration(session.duration)}) · {session.lecturer} · "
                f"{session.status.label}"
            )
            edit_key = f"session:edit:{session.id}"
            edit_col.button("✏️", key=edit_key, on_click=on_edit, args=(session, edit_key))
            delete_key = f"session:delete:{session.id}"
            delete_col.button("🗑️", key=delete_key, on_click=on_delete, args=("session", session.id, delete_key))
    st.caption(
        f"عرض {summary.total} حصة · إجمالي الطلاب: {summary.student_count} · "
        f"إجمالي المدة: {summary.total_duration_label}"
    )


def render_students():
    with st.form("student_form"):
        st.subheader("👤 إضافة طالب جديد")
        st.text_input("اسم الطالب", key="student_form:name")
        st.text_input("رقم الهاتف", key="student_form:phone")
        st.text_input("البريد الإلكتروني", key="student_form:email")
        st.form_submit_button("إضافة الطالب", on_click=on_register, args=("student_form:submit",))

    st.subheader(f"👥 قائمة الطلاب ({len(live.students)})")
    render_delete_prompt("student")
    if not live.students:
        st.info("لا يوجد طلاب مسجلين")
    for student in live.students:
        with st.container(border=True):
            info_col, delete_col = st.columns([7, 1])
            info_col.markdown(
                f"**{student.name}** · 📞 {student.phone} · ✉️ {student.email}  \n"
                f"حصص هذا الطالب: {sessions_for_student(live.sessions, student.id)}"
            )
            key = f"student:delete:{student.id}"
            delete_col.button("🗑️", key=key, on_click=on_delete, args=("student", student.id, key))


# ───────────────────────────────────────────────────────────────
# 6.  Page
# ───────────────────────────────────────────────────────────────
st.title("📚 نظام حجز الحصص")

if identity is None or gateway is None:
    st.warning("الرجاء الانتظار حتى يتم التحميل...")

st.radio(
    "القسم", list(TAB_LABELS), key="active_tab", horizontal=True,
    on_change=on_press, args=("active_tab",),
    format_func=TAB_LABELS.get, label_visibility="collapsed",
)

if st.session_state.flash:
    kind, message = st.session_state.flash
    st.session_state.flash = None
    (st.success if kind == "success" else st.error)(message)

if st.session_state.active_tab == SESSIONS_TAB:
    form_col, list_col = st.columns([1, 2])
    with form_col:
        render_booking_form()
    with list_col:
        render_sessions()
else:
    render_students()
