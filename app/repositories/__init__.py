"""레포지토리 패키지 — 영속성 게이트웨이 계층.

Repository package — Persistence gateway layer.
Modules:
    base: 제네릭 CRUD 및 SQLAlchemy 예외 변환 (Generic CRUD, error translation)
    account_repository: 계정 조회/로그인 검증/연쇄 삭제 (Accounts)
    message_repository: 작성자별 메시지 조회 (Messages)
"""
