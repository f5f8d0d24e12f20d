# magazine/views/test_admin_view.py
import pytest

from magazine.core.errors import PostValidationError
from magazine.core.session import Identity
from magazine.views.admin import AdminAuthoringView, validate_submission


@pytest.fixture
def alerts():
    return []


@pytest.fixture
def form(services, alerts):
    return AdminAuthoringView(Identity(uid='admin-1'), services.posts, alert=alerts.append)


def _stage(form, count):
    for i in range(count):
        form.stage_image(f"photo{i}.png", f"bytes-{i}".encode(), 'image/png')


# ────────────────────────── validation ──────────────────────────
def test_validate_submission_rules():
    validate_submission('제목', 1, '향수')
    validate_submission('제목', 5, '향수')

    with pytest.raises(PostValidationError, match='제목을 입력해주세요.'):
        validate_submission('   ', 1, '향수')
    with pytest.raises(PostValidationError, match='최소 1장의 이미지를 선택해주세요.'):
        validate_submission('제목', 0, '향수')
    with pytest.raises(PostValidationError, match='1~5장의 이미지를 선택해주세요.'):
        validate_submission('제목', 6, '향수')
    with pytest.raises(PostValidationError):
        validate_submission('제목', 1, '스포츠')


@pytest.mark.parametrize("count", [0, 6])
def test_submit_rejects_bad_image_count_without_writing(form, alerts, firebase_client, count):
    form.title = '새 글'
    _stage(form, count)

    assert form.submit() is None

    assert len(alerts) == 1
    assert firebase_client.db.commits == 0
    assert firebase_client.bucket.blobs == {}


def test_submit_rejects_blank_title(form, alerts):
    form.title = '  '
    _stage(form, 1)

    assert form.submit() is None
    assert alerts == ['제목을 입력해주세요.']


# ────────────────────────── form state ──────────────────────────
def test_add_hashtag_trims_dedupes_and_clears_input(form):
    form.hashtag_input = '  보드게임 '
    assert form.add_hashtag() is True
    form.hashtag_input = '보드게임'
    assert form.add_hashtag() is False
    form.hashtag_input = '   '
    assert form.add_hashtag() is False

    assert form.hashtags == ['보드게임']
    assert form.hashtag_input == '   '  # 빈 입력은 그대로 둡니다

    form.hashtag_input = '전략'
    form.add_hashtag()
    form.remove_hashtag(0)
    assert form.hashtags == ['전략']
    assert form.hashtag_input == ''


def test_stage_image_builds_data_url_preview(form):
    image = form.stage_image('a.png', b'abc', 'image/png')
    assert image.preview == 'data:image/png;base64,YWJj'
    assert image.link == ''


def test_remove_image_reindexes_by_position(form, firebase_client):
    form.title = '세 장 중 가운데 삭제'
    _stage(form, 3)
    form.update_image_link(2, 'https://example.com/2')
    form.remove_image(1)

    post_id = form.submit()

    images = firebase_client.db.docs[f"posts/{post_id}"]['images']
    assert [image['order'] for image in images] == [0, 1]
    assert images[0]['link'] == ''
    assert images[1]['link'] == 'https://example.com/2'


# ────────────────────────── submission ──────────────────────────
def test_successful_submit_writes_post_and_resets_form(form, alerts, firebase_client):
    form.title = '칵테일 입문'
    form.description = '집에서 만드는 하이볼'
    form.category = '칵테일'
    form.hashtag_input = '하이볼'
    form.add_hashtag()
    form.hashtag_input = '작성 중'
    _stage(form, 2)
    form.update_image_link(0, 'https://shop.example.com')

    post_id = form.submit()

    assert alerts == ['게시물이 성공적으로 등록되었습니다!']
    post = firebase_client.db.docs[f"posts/{post_id}"]
    assert post['title'] == '칵테일 입문'
    assert post['category'] == '칵테일'
    assert post['hashtags'] == ['하이볼']
    assert post['createdBy'] == 'admin-1'
    assert post['views'] == 0
    assert post['createdAt'] is not None and post['updatedAt'] is not None
    assert [image['order'] for image in post['images']] == [0, 1]
    assert post['images'][0]['link'] == 'https://shop.example.com'
    assert post['images'][0]['url'].startswith('https://firebasestorage.googleapis.com/v0/b/magazine-test.appspot.com/o/posts%2F')
    assert firebase_client.db.commits == 1

    # 폼 초기화
    assert form.title == ''
    assert form.description == ''
    assert form.category == '보드게임'
    assert form.hashtags == []
    assert form.hashtag_input == ''
    assert form.images == []


def test_uploads_are_sequential_and_keyed_by_index_and_filename(form, firebase_client):
    form.title = '순서 확인'
    _stage(form, 3)

    form.submit()

    uploaded = firebase_client.bucket.upload_order
    assert [path.split('_', 2)[1] for path in uploaded] == ['0', '1', '2']
    assert [path.split('_', 2)[2] for path in uploaded] == ['photo0.png', 'photo1.png', 'photo2.png']
    assert all(path.startswith('posts/') for path in uploaded)


def test_upload_failure_alerts_and_keeps_form(form, alerts, firebase_client):
    firebase_client.bucket.fail_uploads_after = 1
    form.title = '업로드 실패'
    _stage(form, 2)

    assert form.submit() is None

    assert alerts == ['게시물 등록에 실패했습니다: storage quota exceeded']
    assert firebase_client.db.commits == 0
    # 먼저 올라간 파일은 그대로 남습니다.
    assert len(firebase_client.bucket.blobs) == 1
    assert form.title == '업로드 실패'
    assert len(form.images) == 2
    assert form.loading is False


def test_categories_come_from_one_list(form):
    from magazine.core.config import Config
    from magazine.models.post import POST_CATEGORIES, DEFAULT_POST_CATEGORY

    assert Config.POST_CATEGORIES is POST_CATEGORIES
    assert Config.DEFAULT_POST_CATEGORY == DEFAULT_POST_CATEGORY
    assert form.categories == POST_CATEGORIES
    assert form.category == DEFAULT_POST_CATEGORY
