from sqlmodel import Session, select

from app.db.models.bornes import BorneStatus
from app.db.models.site_config import SiteConfig
from app.db.models.statistics import Statistics
from app.db.session import engine


def test_global_stats_without_site_config(client, make_borne, make_partner, make_article):
    make_borne("A")
    make_borne("B", is_active=False)
    make_partner("p1")
    make_article("publie")
    make_article("brouillon", is_published=False)

    assert client.get("/api/stats").json() == {
        "total_bornes": 1,
        "total_partners": 1,
        "total_articles": 1,
    }


def test_global_stats_with_site_config(client, session):
    session.add(SiteConfig(key="total_glass_collected", value="1262500"))
    session.add(SiteConfig(key="total_users", value="43800"))
    session.commit()

    body = client.get("/api/stats").json()
    assert body["total_glass_collected"] == 1262500
    assert body["total_users"] == 43800


def test_global_stats_skips_non_finite_site_config(client, session):
    session.add(SiteConfig(key="total_glass_collected", value="nan"))
    session.add(SiteConfig(key="total_users", value="inf"))
    session.commit()

    res = client.get("/api/stats")
    assert res.status_code == 200
    body = res.json()
    assert "total_glass_collected" not in body
    assert "total_users" not in body


def test_monthly_upsert_overwrites(client, editor_headers):
    created = client.post(
        "/api/stats/monthly",
        json={"year": 2025, "month": 3, "total_glass_collected": 400000},
        headers=editor_headers,
    )
    assert created.status_code == 201

    updated = client.post(
        "/api/stats/monthly",
        json={"year": 2025, "month": 3, "total_glass_collected": 452000, "total_users": 43800},
        headers=editor_headers,
    )
    assert updated.status_code == 201
    assert updated.json()["id"] == created.json()["id"]

    with Session(engine) as s:
        rows = s.exec(select(Statistics).where(Statistics.year == 2025, Statistics.month == 3)).all()
    assert len(rows) == 1
    assert rows[0].total_glass_collected == 452000
    assert rows[0].total_users == 43800
    assert rows[0].total_points == 0


def test_monthly_upsert_requires_year_and_month(client, editor_headers):
    for payload in ({"month": 3}, {"year": 2025}, {"year": 2025, "month": 13}):
        res = client.post("/api/stats/monthly", json=payload, headers=editor_headers)
        assert res.status_code == 400
        assert res.json() == {"error": "Année et mois requis"}


def test_monthly_list_latest_twelve(client, session):
    for year in (2024, 2025):
        for month in range(1, 13):
            session.add(Statistics(year=year, month=month))
    session.commit()

    rows = client.get("/api/stats/monthly").json()
    assert len(rows) == 12
    assert (rows[0]["year"], rows[0]["month"]) == (2025, 12)
    assert (rows[-1]["year"], rows[-1]["month"]) == (2025, 1)

    only_2024 = client.get("/api/stats/monthly?year=2024").json()
    assert {r["year"] for r in only_2024} == {2024}


def test_by_city(client, make_borne):
    make_borne("A", city="Saint-Denis")
    make_borne("B", city="Saint-Denis", status=BorneStatus.FULL)
    make_borne("C", city="Le Port")

    assert client.get("/api/stats/by-city").json() == [
        {"city": "Saint-Denis", "total_bornes": 2, "active_bornes": 1},
        {"city": "Le Port", "total_bornes": 1, "active_bornes": 1},
    ]
