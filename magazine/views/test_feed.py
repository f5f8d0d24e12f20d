# magazine/views/test_feed.py
import pytest

from magazine.views.feed import FeedView, filter_posts, should_log_search

POSTS = [
    {'id': 'p1', 'title': '여름 칵테일 레시피', 'hashtags': ['칵테일', '여름']},
    {'id': 'p2', 'title': 'Catan 리뷰', 'hashtags': ['보드게임', '전략']},
    {'id': 'p3', 'title': '향수 입문', 'hashtags': ['향수', 'Citrus']},
    {'id': 'p4', 'title': '태그 없는 글'},
]


def _ids(posts):
    return [post['id'] for post in posts]


# ────────────────────────── filter_posts ──────────────────────────
def test_no_filter_returns_everything_in_order():
    assert _ids(filter_posts(POSTS)) == ['p1', 'p2', 'p3', 'p4']


def test_search_matches_title_or_hashtag_case_insensitively():
    assert _ids(filter_posts(POSTS, 'catan')) == ['p2']
    assert _ids(filter_posts(POSTS, 'CITRUS')) == ['p3']
    assert _ids(filter_posts(POSTS, '칵테일')) == ['p1']


def test_search_is_trimmed_and_blank_search_is_ignored():
    assert _ids(filter_posts(POSTS, '  전략  ')) == ['p2']
    assert _ids(filter_posts(POSTS, '   ')) == ['p1', 'p2', 'p3', 'p4']


def test_search_is_idempotent():
    once = filter_posts(POSTS, '여')
    assert filter_posts(once, '여') == once


def test_tag_filter_is_exact_element_not_substring():
    assert _ids(filter_posts(POSTS, active_tag='여름')) == ['p1']
    assert filter_posts(POSTS, active_tag='여') == []
    assert filter_posts(POSTS, active_tag='citrus') == []


def test_tag_and_search_combine_with_and():
    assert _ids(filter_posts(POSTS, '리뷰', '보드게임')) == ['p2']
    assert filter_posts(POSTS, '향수', '보드게임') == []


@pytest.mark.parametrize("query, expected", [
    ("칵", False),
    ("칵테", False),
    ("칵테일", True),
    ("", False),
])
def test_search_log_threshold_is_longer_than_two(query, expected):
    assert should_log_search(query) is expected


# ────────────────────────── FeedView ──────────────────────────
@pytest.fixture
def feed(services, identity, make_post, make_profile):
    make_profile(identity.uid)
    make_post('old', '보드게임 입문', hashtags=['보드게임'], created_at=1)
    make_post('new', '칵테일 바 투어', hashtags=['칵테일', '여름'], created_at=2)
    view = FeedView(identity, services.posts, services.users, services.activity, on_sign_out=lambda: None)
    view.load()
    return view


def test_load_orders_newest_first_and_reads_admin_flag(feed):
    assert feed.loading is False
    assert feed.is_admin is False
    assert _ids(feed.posts) == ['new', 'old']


def test_load_failure_renders_empty_state(services, identity, firebase_client):
    firebase_client.db.fail_on('posts')
    view = FeedView(identity, services.posts, services.users, services.activity, on_sign_out=lambda: None)

    view.load()

    assert view.loading is False
    assert view.posts == []
    assert view.empty_message == '아직 게시물이 없습니다.'


def test_search_logs_only_above_threshold(feed, activity_logs):
    feed.set_search('칵')
    assert activity_logs() == []

    feed.set_search('칵테일')
    logs = activity_logs()
    assert len(logs) == 1
    assert logs[0]['action'] == 'search'
    assert logs[0]['query'] == '칵테일'
    assert _ids(feed.filtered_posts) == ['new']


def test_search_log_failure_is_not_surfaced(feed, firebase_client):
    firebase_client.db.fail_on('activity')
    feed.set_search('보드게임')
    assert _ids(feed.filtered_posts) == ['old']


def test_tag_click_toggles_and_clears_search(feed):
    feed.set_search('투어')
    feed.click_tag('보드게임')

    assert feed.active_tag == '보드게임'
    assert feed.search_query == ''
    assert _ids(feed.filtered_posts) == ['old']

    feed.click_tag('보드게임')
    assert feed.active_tag is None
    assert _ids(feed.filtered_posts) == ['new', 'old']


def test_empty_message_when_filter_matches_nothing(feed):
    feed.set_search('없는단어')
    assert feed.empty_message == '검색 결과가 없습니다. 다른 단어로 검색해보세요!'

    feed.clear_filters()
    assert feed.empty_message is None


def test_select_post_logs_view(feed, activity_logs):
    feed.select_post(feed.posts[0])

    logs = activity_logs()
    assert logs[0]['action'] == 'view_post'
    assert logs[0]['postId'] == 'new'
    assert logs[0]['postTitle'] == '칵테일 바 투어'
