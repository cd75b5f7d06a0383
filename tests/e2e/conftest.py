"""E2E テスト用フィクスチャ

Firestore Emulator に接続し、実際の Repository を使ってテストする。

前提: FIRESTORE_EMULATOR_HOST 環境変数が設定されていること
  例: FIRESTORE_EMULATOR_HOST=localhost:8080 pytest tests/e2e/ -m e2e -v
未設定の場合は全テストをスキップする。
"""

from __future__ import annotations

import os

import pytest
from google.cloud import firestore


def pytest_collection_modifyitems(config, items):
    if os.environ.get("FIRESTORE_EMULATOR_HOST"):
        return
    skip = pytest.mark.skip(reason="FIRESTORE_EMULATOR_HOST is not set")
    for item in items:
        if item.get_closest_marker("e2e"):
            item.add_marker(skip)


@pytest.fixture(scope="session")
def firestore_client():
    """Firestore Emulator に接続するクライアント（セッション共有）"""
    return firestore.Client(project="test-project")


@pytest.fixture(autouse=True)
def _cleanup_firestore(request):
    """各テスト後に Emulator のデータをクリーンアップ（e2e マーク付きのみ）"""
    yield
    if not request.node.get_closest_marker("e2e"):
        return
    if not os.environ.get("FIRESTORE_EMULATOR_HOST"):
        return
    client = request.getfixturevalue("firestore_client")
    for collection_name in ["groups", "systemSettings"]:
        for doc in client.collection(collection_name).list_documents():
            _delete_document_recursive(doc)


def _delete_document_recursive(doc_ref) -> None:
    """ドキュメントとサブコレクションを再帰的に削除"""
    for subcol in doc_ref.collections():
        for doc in subcol.list_documents():
            _delete_document_recursive(doc)
    doc_ref.delete()
