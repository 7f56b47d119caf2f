from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func

from app.db.models.articles import Article
from app.db.session import engine
from app.features.articles.schemas import ArticleCreateIn
from app.features.articles.services import ArticleService


def _count_articles() -> int:
    with Session(engine) as s:
        return s.exec(select(func.count(Article.id))).one()


def _article(article_id: int) -> Article:
    with Session(engine) as s:
        return s.get(Article, article_id)


NEW_ARTICLE = {
    "title": "Record de collecte",
    "slug": "record-de-collecte",
    "content": "# Titre\nTexte",
    "category": "RESULTATS",
}


# -----------------------------
# Lecture publique
# -----------------------------
def test_list_only_published_newest_first(client, make_article):
    now = datetime.now(timezone.utc)
    make_article("ancien", published_at=now - timedelta(days=2))
    make_article("recent", published_at=now)
    make_article("brouillon", is_published=False)

    res = client.get("/api/articles")
    assert res.status_code == 200
    assert [a["slug"] for a in res.json()] == ["recent", "ancien"]


def test_list_filters_category_featured_and_limit(client, make_article):
    make_article("a", category="CONSEILS", is_featured=True)
    make_article("b", category="CONSEILS")
    make_article("c", category="TRI", is_featured=True)

    assert {a["slug"] for a in client.get("/api/articles?category=CONSEILS").json()} == {"a", "b"}
    assert {a["slug"] for a in client.get("/api/articles?isFeatured=true").json()} == {"a", "c"}
    assert len(client.get("/api/articles?limit=1").json()) == 1


def test_list_limit_has_no_upper_bound(client, make_article):
    for i in range(3):
        make_article(f"article-{i}")

    res = client.get("/api/articles?limit=200")
    assert res.status_code == 200
    assert len(res.json()) == 3


def test_list_output_shape(client, make_article, editor):
    make_article("avec-auteur", author_id=editor.id)
    make_article("sans-auteur")

    rows = {a["slug"]: a for a in client.get("/api/articles").json()}
    assert rows["avec-auteur"]["author_name"] == "editor"
    assert rows["sans-auteur"]["author_name"] is None
    assert rows["sans-auteur"]["tags"] == []


def test_categories_over_published(client, make_article):
    make_article("a", category="TRI")
    make_article("b", category="TRI")
    make_article("c", category="CONSEILS")
    make_article("d", category="EVENEMENT", is_published=False)

    res = client.get("/api/articles/categories/list")
    assert res.json() == [
        {"category": "TRI", "count": 2},
        {"category": "CONSEILS", "count": 1},
    ]


def test_get_by_slug_increments_views_by_one(client, make_article):
    article = make_article("vue")

    first = client.get("/api/articles/slug/vue")
    second = client.get("/api/articles/slug/vue")

    assert first.status_code == 200
    assert first.json()["views"] == 1
    assert second.json()["views"] == 2
    assert _article(article.id).views == 2


def test_get_by_slug_hides_drafts(client, make_article):
    make_article("brouillon", is_published=False)
    res = client.get("/api/articles/slug/brouillon")
    assert res.status_code == 404
    assert res.json() == {"error": "Article non trouvé"}


# -----------------------------
# Back-office
# -----------------------------
def test_admin_list_includes_drafts(client, make_article, editor_headers):
    make_article("publie")
    make_article("brouillon", is_published=False)

    res = client.get("/api/articles/admin/all", headers=editor_headers)
    assert {a["slug"] for a in res.json()} == {"publie", "brouillon"}


def test_get_by_id(client, make_article, editor_headers):
    article = make_article("par-id", is_published=False)
    assert client.get(f"/api/articles/{article.id}", headers=editor_headers).json()["slug"] == "par-id"
    assert client.get("/api/articles/999", headers=editor_headers).status_code == 404


def test_create_article(client, editor, editor_headers):
    res = client.post("/api/articles", json={**NEW_ARTICLE, "is_published": True}, headers=editor_headers)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Article créé avec succès"

    created = _article(body["id"])
    assert created.author_id == editor.id
    assert created.published_at is not None
    assert created.views == 0


def test_create_draft_has_no_publish_date(client, editor_headers):
    res = client.post("/api/articles", json=NEW_ARTICLE, headers=editor_headers)
    assert _article(res.json()["id"]).published_at is None


def test_create_missing_required_field(client, editor_headers):
    payload = {k: v for k, v in NEW_ARTICLE.items() if k != "content"}
    res = client.post("/api/articles", json=payload, headers=editor_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Champs requis manquants"}
    assert _count_articles() == 0


def test_create_duplicate_slug_inserts_nothing(client, make_article, editor_headers):
    make_article(NEW_ARTICLE["slug"])
    res = client.post("/api/articles", json=NEW_ARTICLE, headers=editor_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Ce slug existe déjà"}
    assert _count_articles() == 1


def test_partial_update_keeps_other_fields(client, make_article, editor_headers):
    article = make_article("partiel", title="Avant", content="Texte", tags=["verre"], excerpt="Chapô")

    res = client.put(f"/api/articles/{article.id}", json={"title": "Après"}, headers=editor_headers)
    assert res.status_code == 200

    updated = _article(article.id)
    assert updated.title == "Après"
    assert updated.content == "Texte"
    assert updated.excerpt == "Chapô"
    assert updated.tags == ["verre"]
    assert updated.slug == "partiel"


def test_update_null_field_is_ignored(client, make_article, editor_headers):
    article = make_article("nul", excerpt="Garde-moi")
    client.put(f"/api/articles/{article.id}", json={"excerpt": None}, headers=editor_headers)
    assert _article(article.id).excerpt == "Garde-moi"


def test_update_to_taken_slug(client, make_article, editor_headers):
    make_article("pris")
    other = make_article("libre")
    res = client.put(f"/api/articles/{other.id}", json={"slug": "pris"}, headers=editor_headers)
    assert res.status_code == 400
    assert _article(other.id).slug == "libre"


def test_published_at_survives_unpublish_and_republish(client, make_article, editor_headers):
    article = make_article("cycle", is_published=False)

    client.put(f"/api/articles/{article.id}", json={"is_published": True}, headers=editor_headers)
    first_date = _article(article.id).published_at
    assert first_date is not None

    client.put(f"/api/articles/{article.id}", json={"is_published": False}, headers=editor_headers)
    assert _article(article.id).published_at == first_date

    client.put(f"/api/articles/{article.id}", json={"is_published": True}, headers=editor_headers)
    assert _article(article.id).published_at == first_date


def test_update_missing_article(client, editor_headers):
    res = client.put("/api/articles/404", json={"title": "x"}, headers=editor_headers)
    assert res.status_code == 404


def test_delete_article(client, make_article, editor_headers):
    article = make_article("a-supprimer")
    res = client.delete(f"/api/articles/{article.id}", headers=editor_headers)
    assert res.status_code == 200
    assert _article(article.id) is None
    assert client.delete(f"/api/articles/{article.id}", headers=editor_headers).status_code == 404


# -----------------------------
# Erreurs d'intégrité à l'écriture
# -----------------------------
class _FailingInsertRepo:
    """Le slug est libre au contrôle, l'insertion échoue quand même."""

    def __init__(self, slug_taken_after_insert: bool):
        self.slug_taken_after_insert = slug_taken_after_insert
        self.inserted = False
        self.rolled_back = False

    def exists(self, column, value, *, exclude_id=None):
        return self.inserted and self.slug_taken_after_insert

    def create(self, **fields):
        self.inserted = True
        raise IntegrityError("INSERT INTO articles", {}, Exception("FOREIGN KEY constraint failed"))

    def rollback(self):
        self.rolled_back = True


def test_create_integrity_error_other_than_slug_propagates():
    repo = _FailingInsertRepo(slug_taken_after_insert=False)
    svc = ArticleService(repo)

    with pytest.raises(IntegrityError):
        svc.create(ArticleCreateIn(**NEW_ARTICLE, author_id=999), author_id=None)
    assert repo.rolled_back


def test_create_slug_taken_concurrently_is_reported_as_duplicate():
    repo = _FailingInsertRepo(slug_taken_after_insert=True)
    svc = ArticleService(repo)

    with pytest.raises(HTTPException) as exc:
        svc.create(ArticleCreateIn(**NEW_ARTICLE), author_id=None)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Ce slug existe déjà"
    assert repo.rolled_back
