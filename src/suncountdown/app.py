"""SunCountdown — Streamlit app counting down to the next solar event.

Run with:
    streamlit run src/suncountdown/app.py
"""

import datetime
import logging

import streamlit as st
from dotenv import load_dotenv
from pytz import timezone

load_dotenv()

from suncountdown.compute import (  # noqa: E402
    day_length,
    format_day_length,
    next_event_time,
    retarget_event,
    year_event_times,
)
from suncountdown.config import load_settings  # noqa: E402
from suncountdown.countdown import (  # noqa: E402
    MAX_INTERVAL_MS,
    MIN_INTERVAL_MS,
    TickLog,
    countdown_text,
    edited_target,
)
from suncountdown.models import Country, SolarEvent, ViewState  # noqa: E402
from suncountdown.projection import MapViewport  # noqa: E402
from suncountdown.renderers.plotly_2d import (  # noqa: E402
    render_sun_graph,
    render_world_map,
)
from suncountdown.worldmap import load_world_map  # noqa: E402
from suncountdown.yeargraph import date_for_x  # noqa: E402

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_GRAPH_WIDTH = 760
_GRAPH_HEIGHT = 300
_MAP_WIDTH = 900
_MAP_HEIGHT = 600
_PAN_STEP = 60.0
_ZOOM_STEP = 1.25
_REFRESH = datetime.timedelta(milliseconds=100)
_LOG_ROWS = 200

st.set_page_config(
    page_title="SunCountdown",
    page_icon="☀",
    layout="wide",
)


@st.cache_resource
def _world_map() -> tuple[Country, ...]:
    return load_world_map(settings.world_geojson_path)


def _now() -> datetime.datetime:
    """Wall-clock time in the reference zone, naive like the calculator's results."""
    return datetime.datetime.now(timezone(settings.timezone)).replace(tzinfo=None)


def _retarget(view: ViewState, day: datetime.date | datetime.datetime) -> None:
    view.target = retarget_event(
        day, view.latitude, view.longitude, view.event, tz_name=settings.timezone
    )


# --- Session state initialization ---
if "view" not in st.session_state:
    _start = _now()
    st.session_state.view = ViewState(
        target=next_event_time(
            _start,
            settings.latitude,
            settings.longitude,
            SolarEvent.SUNRISE,
            tz_name=settings.timezone,
        ),
        latitude=settings.latitude,
        longitude=settings.longitude,
    )
    logger.info("Session started, target %s", st.session_state.view.target)
if "tick_log" not in st.session_state:
    st.session_state.tick_log = TickLog()
if "graph_pick" not in st.session_state:
    st.session_state.graph_pick = None
if "map_pick" not in st.session_state:
    st.session_state.map_pick = None

view: ViewState = st.session_state.view
tick_log: TickLog = st.session_state.tick_log

st.markdown(
    """
    <style>
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    [data-testid="stMainBlockContainer"] {
        padding-top: 1rem !important;
    }
    .countdown {
        font-family: ui-monospace, 'SF Mono', Menlo, monospace;
        font-size: 1.6rem;
        font-weight: 600;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

countdown_tab, graph_tab = st.tabs(["⏱ Countdown", "☀ Sun Graph & Map"])

# --- Countdown tab ---
with countdown_tab:
    col1, col2, col3 = st.columns([2, 2, 2])
    with col1:
        date_val = st.date_input("Target Date", value=view.target.date())
    with col2:
        time_val = st.time_input(
            "Target Time", value=view.target.time().replace(microsecond=0), step=60
        )
    with col3:
        labels = [event.label for event in SolarEvent]
        chosen = st.selectbox("Sun Event", labels, index=labels.index(view.event.label))

    picked = datetime.datetime.combine(date_val, time_val)
    if SolarEvent.from_label(chosen) is not view.event:
        view.event = SolarEvent.from_label(chosen)
        _retarget(view, picked)
        st.rerun()
    view.target = edited_target(view.target, picked)

    interval = st.slider(
        f"Interval: {tick_log.interval_ms // 1000}s",
        min_value=MIN_INTERVAL_MS,
        max_value=MAX_INTERVAL_MS,
        value=tick_log.interval_ms,
        step=1000,
    )
    if interval != tick_log.interval_ms:
        tick_log.set_interval(interval)
        st.rerun()

    @st.fragment(run_every=_REFRESH)
    def _countdown_panel() -> None:
        now = _now()
        tick_log.tick(now)
        target = st.session_state.view.target
        st.markdown(f"Current Time: **{now:%H:%M:%S}**")
        st.markdown(
            f"<div class='countdown'>Countdown: {countdown_text(now, target)}</div>",
            unsafe_allow_html=True,
        )
        st.markdown("**Logs:**")
        st.text("\n".join(tick_log.entries[:_LOG_ROWS]) or "—")

    _countdown_panel()

# --- Sun graph & map tab ---
with graph_tab:
    length = day_length(
        view.target, view.latitude, view.longitude, tz_name=settings.timezone
    )
    st.markdown(f"#### Day Length: {format_day_length(length)}")

    year = view.target.year
    event_times = year_event_times(
        year, view.latitude, view.longitude, tz_name=settings.timezone
    )
    graph = render_sun_graph(
        year, event_times, view.target.date(), _GRAPH_WIDTH, _GRAPH_HEIGHT
    )
    graph_event = st.plotly_chart(
        graph,
        use_container_width=False,
        config={"displayModeBar": False},
        on_select="rerun",
        selection_mode="points",
        key="sun_graph",
    )
    graph_points = graph_event.selection.points if graph_event else []
    if graph_points:
        x = float(graph_points[0]["x"])
        if x != st.session_state.graph_pick:
            st.session_state.graph_pick = x
            new_day = date_for_x(x, _GRAPH_WIDTH, year)
            _retarget(view, new_day)
            st.rerun()

    st.markdown("Map (click to choose location)")
    viewport = MapViewport(
        _MAP_WIDTH, _MAP_HEIGHT, view.offset_x, view.offset_y, view.scale
    )

    moves = [
        ("←", lambda v: v.panned(_PAN_STEP, 0)),
        ("→", lambda v: v.panned(-_PAN_STEP, 0)),
        ("↑", lambda v: v.panned(0, _PAN_STEP)),
        ("↓", lambda v: v.panned(0, -_PAN_STEP)),
        ("＋", lambda v: v.zoomed(_ZOOM_STEP)),
        ("－", lambda v: v.zoomed(1 / _ZOOM_STEP)),
        ("Reset", lambda v: MapViewport(v.width, v.height)),
    ]
    for i, (col, (label, move)) in enumerate(zip(st.columns(len(moves)), moves)):
        with col:
            if st.button(label, key=f"map_move_{i}", use_container_width=True):
                viewport = move(viewport)
                view.offset_x, view.offset_y = viewport.offset_x, viewport.offset_y
                view.scale = viewport.scale

    lat_col, lon_col = st.columns(2)
    with lat_col:
        lat_val = st.number_input(
            "Latitude", -90.0, 90.0, value=float(view.latitude), format="%.4f"
        )
    with lon_col:
        lon_val = st.number_input(
            "Longitude", -180.0, 180.0, value=float(view.longitude), format="%.4f"
        )
    if (lat_val, lon_val) != (view.latitude, view.longitude):
        view.latitude, view.longitude = lat_val, lon_val
        st.rerun()

    countries = _world_map()
    if not countries:
        st.caption(f"No boundary data at {settings.world_geojson_path}")
    map_event = st.plotly_chart(
        render_world_map(countries, viewport, (view.latitude, view.longitude)),
        use_container_width=False,
        config={"displayModeBar": False},
        on_select="rerun",
        selection_mode="points",
        key="world_map",
    )
    map_points = map_event.selection.points if map_event else []
    if map_points:
        pick = (float(map_points[0]["x"]), float(map_points[0]["y"]))
        if pick != st.session_state.map_pick:
            st.session_state.map_pick = pick
            location = viewport.unproject(*pick)
            if location is not None:
                lat, lon = location
                view.latitude, view.longitude = lat, (lon + 180.0) % 360.0 - 180.0
                logger.debug("Location picked on map: %.4f, %.4f", lat, lon)
                st.rerun()
