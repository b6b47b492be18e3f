"""End-to-end tests through the navigator session."""

import requests

from art_navigator.catalog.static import StaticCatalog
from art_navigator.catalog.supabase import SupabaseCatalog
from art_navigator.chat import FALLBACK_NOTICE, WELCOME_MESSAGE
from art_navigator.config import Settings
from art_navigator.extractors.gateway import ExtractionGateway
from art_navigator.models import CanonicalFilter, TimeRange
from art_navigator.reconciler import CascadeScheduler
from art_navigator.session import NavigatorSession
from art_navigator.url_state import HistoryAddressBar

from conftest import fields_json

POST = "art_navigator.extractors.remote.requests.post"


def test_renaissance_italy_scenario(make_session, offline_settings, clock):
    address_bar = HistoryAddressBar()
    session = make_session(offline_settings, address_bar=address_bar)

    reply = session.submit_chat("显示文艺复兴时期意大利的画作")

    assert session.filter == CanonicalFilter(time_range=TimeRange(1400, 1600), location="Italy")
    assert reply.startswith(FALLBACK_NOTICE)
    assert address_bar.read() == {"location": "Italy", "start": "1400", "end": "1600"}

    # The results view waits for the controls to settle
    assert not session.tick()
    assert session.results is None

    clock.advance(0.3)
    assert session.tick()
    assert sorted(a.year for a in session.results.artworks) == [1485, 1503]
    assert session.results.location == "Italy"
    assert session.results.time_range == TimeRange(1400, 1600)
    assert sorted(a.year for a in session.filtered_artworks()) == [1485, 1503]


def test_remote_extraction_scenario(mocker, make_session, settings, completion_response, clock):
    mocker.patch(POST, return_value=completion_response(
        fields_json(start_time="1939年", end_time="1945年", country="德国", city="柏林")
    ))
    session = make_session(settings)

    reply = session.submit_chat("二战期间的柏林有哪些作品")

    assert session.filter.time_range == TimeRange(1939, 1945)
    assert session.filter.location == "德国"
    assert not reply.startswith(FALLBACK_NOTICE)

    clock.advance(0.3)
    assert session.tick()
    assert session.results.artworks == []
    assert "未找到" in session.results.message


def test_chat_history(make_session, offline_settings):
    session = make_session(offline_settings)
    session.submit_chat("法国")

    texts = [(m.sender, m.text) for m in session.chat.messages]
    assert texts[0] == ("bot", WELCOME_MESSAGE)
    assert texts[1] == ("user", "法国")
    assert texts[2][0] == "bot"
    assert len({m.id for m in session.chat.messages}) == 3


def test_blank_submission_is_ignored(make_session, offline_settings):
    session = make_session(offline_settings)
    assert session.submit_chat("   ") is None
    assert len(session.chat.messages) == 1


def test_oversized_submission_leaves_filter_alone(make_session, offline_settings):
    session = make_session(offline_settings)
    session.change_time_range(1500, 1700)

    reply = session.submit_chat("意大利" * 1000)

    assert "2200" in reply
    assert session.filter == CanonicalFilter(time_range=TimeRange(1500, 1700))


def test_no_match_keeps_previous_filter(make_session, offline_settings):
    session = make_session(offline_settings)
    session.submit_chat("日本")
    session.submit_chat("随便看看")
    assert session.filter.location == "Japan"


def test_chat_time_only_keeps_map_location(make_session, offline_settings):
    session = make_session(offline_settings)
    assert session.select_country("Spain") is None

    session.submit_chat("现代艺术")

    assert session.filter == CanonicalFilter(time_range=TimeRange(1900, 1980), location="Spain")


class ReentrantGateway(ExtractionGateway):
    """Submits a second message while the first extraction is outstanding."""

    def __init__(self, settings):
        super().__init__(settings=settings)
        self.session = None
        self.nested_reply = "unset"

    def process_user_query(self, utterance):
        if self.nested_reply == "unset":
            self.nested_reply = self.session.chat.submit("巴洛克荷兰")
        return super().process_user_query(utterance)


def test_submission_while_busy_is_ignored(make_session, offline_settings, log_lines):
    gateway = ReentrantGateway(offline_settings)
    session = make_session(offline_settings, gateway=gateway)
    gateway.session = session

    session.submit_chat("文艺复兴意大利")

    assert gateway.nested_reply is None
    assert session.filter.location == "Italy"
    assert [m.text for m in session.chat.messages if m.sender == "user"] == ["文艺复兴意大利"]
    assert any("Ignored submission while busy" in message for _, message in log_lines)
    assert not session.chat.busy


def test_map_click_cascades(make_session, offline_settings, clock):
    session = make_session(offline_settings)

    assert session.click_map(43.77, 11.25) is None

    assert session.filter.location == "Italy"
    clock.advance(0.3)
    assert session.tick()
    assert [a.title for a in session.results.artworks] == ["The Birth of Venus", "Mona Lisa"]


def test_map_click_on_empty_place(make_session, offline_settings):
    session = make_session(offline_settings)
    session.change_time_range(1400, 1500)

    message = session.click_map(35.68, 139.69)

    assert message == "在 Tokyo, Japan（1400-1500）未找到艺术品"
    assert session.filter.location is None
    assert session.reconciler.scheduler.pending is None


def test_map_click_outside_known_countries(make_session, offline_settings):
    session = make_session(offline_settings)
    assert "Unknown Location" in session.click_map(0.0, -30.0)


def test_timeline_drag_does_not_cascade(make_session, offline_settings, clock):
    session = make_session(offline_settings)
    session.select_country("Italy")
    session.change_time_range(1600, 1450)

    assert session.filter.time_range == TimeRange(1450, 1600)
    clock.advance(1.0)
    assert not session.tick()
    assert session.results is None


def test_shared_link_seeds_session(make_session, offline_settings):
    address_bar = HistoryAddressBar(entries=[{"location": "Spain", "start": "1900", "end": "1950"}])
    session = make_session(offline_settings, address_bar=address_bar)

    assert [a.title for a in session.filtered_artworks()] == ["The Persistence of Memory", "Guernica"]


def test_navigation_round_trip(make_session, offline_settings):
    address_bar = HistoryAddressBar()
    session = make_session(offline_settings, address_bar=address_bar)
    session.submit_chat("文艺复兴意大利")
    session.submit_chat("日本")

    session.navigate(address_bar.back())
    assert session.filter.location == "Italy"

    session.navigate(address_bar.forward())
    assert session.filter.location == "Japan"
    assert len(address_bar.entries) == 3


def test_clear_filters(make_session, offline_settings):
    address_bar = HistoryAddressBar()
    session = make_session(offline_settings, address_bar=address_bar)
    session.submit_chat("文艺复兴意大利")

    session.clear_filters()

    assert session.filter == CanonicalFilter()
    assert address_bar.url == "/"
    assert len(session.filtered_artworks()) == 8


class FlakyCatalog(StaticCatalog):
    """Fails its first listing, then recovers."""

    def __init__(self, settings):
        super().__init__(settings=settings)
        self.calls = 0

    def _do_list(self, query):
        self.calls += 1
        if self.calls == 1:
            raise requests.ConnectionError("connection reset")
        return super()._do_list(query)


def test_failed_collection_load_is_retried(offline_settings, clock):
    session = NavigatorSession(
        catalog=FlakyCatalog(offline_settings),
        address_bar=HistoryAddressBar(),
        scheduler=CascadeScheduler(clock),
        settings=offline_settings,
    )

    assert session.filtered_artworks() == []
    assert len(session.filtered_artworks()) == 8


def test_collection_respects_fetch_limit(catalog, clock):
    settings = Settings(_env_file=None, catalog_fetch_limit=3)
    session = NavigatorSession(catalog=catalog, scheduler=CascadeScheduler(clock), settings=settings)
    assert [a.year for a in session.collection()] == [1485, 1503, 1665]


def test_configured_baseline(make_session, clock):
    settings = Settings(_env_file=None, default_start_year=1000, default_end_year=2030, cascade_delay=0.3)
    address_bar = HistoryAddressBar()
    session = make_session(settings, address_bar=address_bar)

    assert session.filter == CanonicalFilter(time_range=TimeRange(1000, 2030))
    assert address_bar.read() == {}

    session.submit_chat("日本")
    assert address_bar.read() == {"location": "Japan"}

    session.clear_filters()
    assert session.filter.time_range == TimeRange(1000, 2030)


def test_session_catalog_uses_session_settings():
    settings = Settings(_env_file=None, catalog_source="supabase", supabase_url="https://db.example.org")
    session = NavigatorSession(settings=settings)

    assert isinstance(session.catalog, SupabaseCatalog)
    assert session.catalog.settings is settings
    assert session.catalog.base_url == "https://db.example.org/rest/v1/artworks"
