from __future__ import annotations

import pytest

from models import parse_entity
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import LoadEntities, PublishSite, RenderSite, SelectPublished
from sources import CatalogError, get_source


def _load(path, source="dashboard_export") -> RunContext:
    return LoadEntities(get_source(source), path).run(RunContext())


def test_load_entities_reads_both_collections(write_catalog):
    path = write_catalog({
        "businesses": [{"id": "a", "name": "Acme", "address": "Seoul Mapo 1", "hours": "Mo-Fr 09:00-18:00",
                        "lat": 37.5, "lng": 126.9}],
        "freelancers": [{"id": "a", "name": "Jane", "skills": ["logo", "print"]}],
    })
    ctx = _load(path)
    business, freelancer = ctx.entities
    assert business.kind == "business" and freelancer.kind == "freelancer"
    assert business.hours_list == ["Mo-Fr 09:00-18:00"]
    assert business.coordinates.is_complete
    assert freelancer.keywords == ["logo", "print"]
    assert ctx.meta["entities_loaded"] == 2
    assert ctx.meta["source_name"] == "dashboard_export"


def test_load_entities_empty_catalog_fails(write_catalog):
    with pytest.raises(CatalogError):
        _load(write_catalog({"businesses": []}))


def test_load_entities_missing_file_fails(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        _load(tmp_path / "missing.json")


def test_load_entities_unparseable_file_fails(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        _load(path)


def test_load_entities_reports_invalid_record_position(write_catalog, acme_record):
    path = write_catalog([acme_record, {"id": "nameless", "address": "x"}])
    with pytest.raises(CatalogError, match="#1") as exc:
        _load(path)
    assert "nameless" in str(exc.value)


def test_load_entities_rejects_duplicate_ids(write_catalog, acme_record):
    with pytest.raises(CatalogError, match="Duplicate"):
        _load(write_catalog([acme_record, dict(acme_record)]))


def test_dashboard_export_requires_a_collection(write_catalog):
    with pytest.raises(CatalogError):
        _load(write_catalog({"items": []}))


def test_static_catalog_flattens_address_and_geo(write_catalog):
    path = write_catalog({"businesses": [{
        "id": "cafe",
        "name": "Cafe",
        "address": {"street": "12 Road", "city": "Seoul", "district": "Jongno", "postalCode": "03000"},
        "geo": {"lat": 37.57, "lng": 126.98},
        "keywords": ["coffee"],
        "specialties": ["coffee", "dessert"],
    }]})
    entity = _load(path, "static_catalog").entities[0]
    assert entity.address == "Seoul Jongno 12 Road 03000"
    assert entity.area == "Seoul Jongno"
    assert entity.coordinates.lat == 37.57
    assert entity.keywords == ["coffee", "dessert"]


def test_static_catalog_reads_yaml(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "businesses:\n"
        "  - id: shop\n"
        "    name: Shop\n"
        "    address: Busan Haeundae 5\n"
        "    keywords: [surf, rental]\n",
        encoding="utf-8",
    )
    entity = _load(path, "static_catalog").entities[0]
    assert entity.name == "Shop"
    assert entity.keywords == ["surf", "rental"]


def test_select_published_filters_inactive(acme_record):
    ctx = RunContext(entities=[
        parse_entity(acme_record),
        parse_entity({**acme_record, "id": "b", "status": "inactive"}),
    ])
    out = SelectPublished().run(ctx)
    assert [e.id for e in out.published] == ["a"]
    assert out.meta["entities_skipped"] == 1

    everything = SelectPublished(active_only=False).run(RunContext(entities=ctx.entities))
    assert len(everything.published) == 2


def test_render_site_document_order(settings, acme_record):
    ctx = RunContext(published=[parse_entity(acme_record), parse_entity({"kind": "freelancer", "id": "f", "name": "F"})])
    out = RenderSite(settings).run(ctx)
    paths = [d.path for d in out.documents]
    assert paths == [
        "index.html",
        "llms.txt",
        "brands/a/index.html",
        "freelancers/f/index.html",
        "brands/a/llms.txt",
        "freelancers/f/llms.txt",
        "sitemap.xml",
        "robots.txt",
    ]
    priorities = {d.path: d.priority for d in out.documents if d.url}
    assert priorities["index.html"] == "1.0"
    assert priorities["brands/a/index.html"] == "0.9"
    assert priorities["llms.txt"] == "0.8"
    assert priorities["freelancers/f/llms.txt"] == "0.7"


def test_render_site_adds_key_file_when_configured(settings, acme_record):
    import dataclasses

    keyed = dataclasses.replace(settings, indexnow_key="abc123")
    out = RenderSite(keyed).run(RunContext(published=[parse_entity(acme_record)]))
    key_doc = out.documents[-1]
    assert key_doc.path == "abc123.txt"
    assert key_doc.content == "abc123"
    assert key_doc.url is None


def test_publish_site_clears_only_entity_directories(tmp_path, settings, acme_record):
    out_dir = tmp_path / "site"
    (out_dir / "brands" / "gone").mkdir(parents=True)
    (out_dir / "brands" / "gone" / "index.html").write_text("old", encoding="utf-8")
    (out_dir / "CNAME").write_text("brands.example.com", encoding="utf-8")

    pipeline = Pipeline([RenderSite(settings), PublishSite(out_dir)])
    ctx = pipeline.run(RunContext(published=[parse_entity(acme_record)]))

    assert not (out_dir / "brands" / "gone").exists()
    assert (out_dir / "brands" / "a" / "index.html").exists()
    assert (out_dir / "CNAME").read_text(encoding="utf-8") == "brands.example.com"
    assert ctx.meta["documents_written"] == len(ctx.documents)
