"""Pages publiques rendues côté serveur."""

from app.db.models.bornes import BorneStatus


def test_home_page(client, make_article, make_borne, make_partner):
    make_article("derniere", title="Dernière actualité")
    for i in range(5):
        make_borne(f"Borne {i}")
    make_partner("vitrine", name="Vitrine", is_featured=True)

    res = client.get("/")
    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]
    assert "Dernière actualité" in res.text
    assert "Vitrine" in res.text
    assert "Borne 3" in res.text
    assert "Borne 4" not in res.text
    # stats vides
    assert "de verre collecté" in res.text


def test_articles_page_promotes_first_featured(client, make_article):
    make_article("une", title="À la une du mois", is_featured=True)
    make_article("autre", title="Autre nouvelle")
    make_article("brouillon", title="Brouillon secret", is_published=False)

    res = client.get("/actualites")
    assert res.status_code == 200
    assert "À la une du mois" in res.text
    assert "Autre nouvelle" in res.text
    assert "Brouillon secret" not in res.text


def test_articles_page_category_filter(client, make_article):
    make_article("tri", title="Bien trier", category="TRI")
    make_article("event", title="Grande fête", category="EVENEMENT")

    res = client.get("/actualites?category=TRI")
    assert "Bien trier" in res.text
    assert "Grande fête" not in res.text


def test_article_page_renders_content_and_counts_view(client, make_article):
    make_article("detail", title="Détail", content="## Section\n- **point**", category="TRI")
    make_article("voisin", title="Article voisin", category="TRI")

    res = client.get("/actualites/detail")
    assert res.status_code == 200
    assert "<h2>Section</h2>" in res.text
    assert "<strong>point</strong>" in res.text
    assert "Article voisin" in res.text
    assert "1 vue" in res.text

    assert client.get("/api/articles/slug/detail").json()["views"] == 2


def test_unknown_article_renders_404_page(client):
    res = client.get("/actualites/inexistant")
    assert res.status_code == 404
    assert "text/html" in res.headers["content-type"]
    assert "404" in res.text


def test_partners_page(client, make_partner):
    make_partner("cafe", name="Café des Arts", advantages=["Un", "Deux", "Troisième avantage"])
    make_partner("ferme", name="Boutique fermée", is_active=False)

    res = client.get("/partenaires")
    assert res.status_code == 200
    assert "Café des Arts" in res.text
    assert "Troisième avantage" not in res.text
    assert "Boutique fermée" not in res.text


def test_partner_page_with_similar(client, make_partner):
    make_partner("cafe-a", name="Café A", category="CAFE", advantages=["Café offert"])
    make_partner("cafe-b", name="Café B", category="CAFE")
    make_partner("bar", name="Bar C", category="BAR")

    res = client.get("/partenaires/cafe-a")
    assert res.status_code == 200
    assert "Café offert" in res.text
    assert "Café B" in res.text
    assert "Bar C" not in res.text


def test_unknown_partner_renders_404_page(client, make_partner):
    make_partner("ferme", is_active=False)
    assert client.get("/partenaires/ferme").status_code == 404


def test_map_page_filters(client, make_borne):
    make_borne("Barachois", city="Saint-Denis")
    make_borne("Jardin", city="Saint-Denis", status=BorneStatus.FULL)
    make_borne("Front de mer", city="Saint-Pierre")

    res = client.get("/carte?city=Saint-Denis&status=ACTIVE")
    assert res.status_code == 200
    assert "1 borne trouvée" in res.text
    assert "Barachois" in res.text
    assert "Front de mer" not in res.text


def test_map_page_selected_borne(client, make_borne):
    borne = make_borne("Sélectionnée", city="Le Port", latitude=-20.937, longitude=55.292)
    res = client.get(f"/carte?borne={borne.id}")
    assert res.status_code == 200
    assert "Itinéraire" in res.text
    assert "-20.937" in res.text


def test_map_popups_treat_borne_fields_as_text(client, make_borne):
    make_borne("<img src=x onerror=alert(1)>", city="<b>Saint-Paul</b>")

    for url in ("/carte", "/"):
        res = client.get(url)
        assert res.status_code == 200
        assert "<img src=x" not in res.text
        assert "<b>Saint-Paul</b>" not in res.text
        assert 'bindPopup("<strong>"' not in res.text
        assert "title.textContent = m.name" in res.text
