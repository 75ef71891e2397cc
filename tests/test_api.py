"""HTTP API 테스트.

HTTP API tests — Registration, login, and message routes including the
status mapping for missing messages.
"""

from httpx import AsyncClient

from app.models import Account, Message
from tests.conftest import TEST_PASSWORD, make_message


class TestRegister:
    """회원가입 테스트."""

    async def test_register(self, client: AsyncClient):
        """회원가입 성공 — 비밀번호는 응답에 포함되지 않음."""
        res = await client.post("/register", json={"username": "ann", "password": "pass1"})
        assert res.status_code == 200
        data = res.json()
        assert data["username"] == "ann"
        assert isinstance(data["account_id"], int)
        assert "password" not in data

    async def test_register_duplicate(self, client: AsyncClient, alice: Account):
        """중복 사용자명은 400."""
        res = await client.post("/register", json={"username": "alice", "password": "pass1"})
        assert res.status_code == 400

    async def test_register_blank_username(self, client: AsyncClient):
        """빈 사용자명은 400."""
        res = await client.post("/register", json={"username": "", "password": "pass1"})
        assert res.status_code == 400

    async def test_register_missing_password(self, client: AsyncClient):
        """비밀번호 누락은 400."""
        res = await client.post("/register", json={"username": "ann"})
        assert res.status_code == 400


class TestLogin:
    """로그인 테스트."""

    async def test_login(self, client: AsyncClient, alice: Account):
        """로그인 성공."""
        res = await client.post("/login", json={"username": "alice", "password": TEST_PASSWORD})
        assert res.status_code == 200
        assert res.json() == {"account_id": alice.account_id, "username": "alice"}

    async def test_login_wrong_password(self, client: AsyncClient, alice: Account):
        """비밀번호 불일치는 401."""
        res = await client.post("/login", json={"username": "alice", "password": "nope"})
        assert res.status_code == 401


class TestMessages:
    """메시지 라우트 테스트."""

    async def test_create_message(self, client: AsyncClient, alice: Account):
        """메시지 작성 성공."""
        res = await client.post("/messages", json={
            "posted_by": alice.account_id,
            "message_text": "hello",
            "time_posted_epoch": 1000,
        })
        assert res.status_code == 200
        data = res.json()
        assert data["posted_by"] == alice.account_id
        assert data["message_text"] == "hello"
        assert data["time_posted_epoch"] == 1000
        assert isinstance(data["message_id"], int)

    async def test_create_message_unknown_account(self, client: AsyncClient):
        """없는 계정 명의의 작성은 400."""
        res = await client.post("/messages", json={"posted_by": 9999, "message_text": "hello"})
        assert res.status_code == 400

    async def test_create_message_without_account(self, client: AsyncClient):
        """posted_by 누락은 400."""
        res = await client.post("/messages", json={"message_text": "hello"})
        assert res.status_code == 400

    async def test_create_message_too_long(self, client: AsyncClient, alice: Account):
        """254자 초과 본문은 400."""
        res = await client.post("/messages", json={
            "posted_by": alice.account_id,
            "message_text": "x" * 255,
        })
        assert res.status_code == 400

    async def test_list_messages(self, client: AsyncClient, alice_message: Message):
        """전체 메시지 목록."""
        res = await client.get("/messages")
        assert res.status_code == 200
        assert [m["message_id"] for m in res.json()] == [alice_message.message_id]

    async def test_get_message(self, client: AsyncClient, alice_message: Message):
        """메시지 단건 조회."""
        res = await client.get(f"/messages/{alice_message.message_id}")
        assert res.status_code == 200
        assert res.json()["message_text"] == "I am here!"

    async def test_get_missing_message_is_empty(self, client: AsyncClient):
        """없는 메시지 조회는 빈 200."""
        res = await client.get("/messages/9999")
        assert res.status_code == 200
        assert res.content == b""

    async def test_delete_message(self, client: AsyncClient, alice_message: Message):
        """삭제 시 삭제된 메시지를 반환, 이후 조회는 빈 응답."""
        message_id = alice_message.message_id
        res = await client.delete(f"/messages/{message_id}")
        assert res.status_code == 200
        assert res.json()["message_id"] == message_id

        res = await client.get(f"/messages/{message_id}")
        assert res.content == b""

    async def test_delete_missing_message_is_empty(self, client: AsyncClient):
        """없는 메시지 삭제는 빈 200."""
        res = await client.delete("/messages/9999")
        assert res.status_code == 200
        assert res.content == b""

    async def test_patch_message(self, client: AsyncClient, alice: Account, alice_message: Message):
        """본문 수정 — 작성자/시각은 유지."""
        res = await client.patch(
            f"/messages/{alice_message.message_id}", json={"message_text": "edited"}
        )
        assert res.status_code == 200
        data = res.json()
        assert data["message_text"] == "edited"
        assert data["posted_by"] == alice.account_id
        assert data["time_posted_epoch"] == 1669947792

    async def test_patch_missing_message(self, client: AsyncClient):
        """없는 메시지 수정은 400."""
        res = await client.patch("/messages/9999", json={"message_text": "edited"})
        assert res.status_code == 400

    async def test_patch_blank_text(self, client: AsyncClient, alice_message: Message):
        """빈 본문 수정은 400."""
        res = await client.patch(f"/messages/{alice_message.message_id}", json={"message_text": ""})
        assert res.status_code == 400

    async def test_account_messages(self, client: AsyncClient, db, alice: Account, bob: Account):
        """계정별 메시지 목록 — 없으면 빈 목록."""
        await make_message(db, alice, "mine")
        res = await client.get(f"/accounts/{alice.account_id}/messages")
        assert res.status_code == 200
        assert [m["message_text"] for m in res.json()] == ["mine"]

        res = await client.get(f"/accounts/{bob.account_id}/messages")
        assert res.json() == []


class TestHealth:
    """헬스 체크 및 요청 ID 테스트."""

    async def test_health(self, client: AsyncClient):
        """헬스 체크."""
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}

    async def test_request_id_header(self, client: AsyncClient):
        """요청 ID 헤더를 그대로 돌려줌."""
        res = await client.get("/messages", headers={"X-Request-ID": "abc-123"})
        assert res.headers["X-Request-ID"] == "abc-123"
