import io
import pytest
from kollator.importers.delimited import DirectoryImporter, DelimitedTextImporter
from kollator.pipeline import collate_path, importer_for_path

@pytest.fixture
def guide_repo(tmp_path):
    guide_dir = tmp_path / "guide"
    (guide_dir / "essentials").mkdir(parents=True)
    (guide_dir / "introduction.md").write_text(
        "# Introduction\n\nVue is a framework for building user interfaces.\n"
        "---8<---\n"
        "# Introduction\n\nVue is a framework for building user interfaces.\n",
        encoding="utf-8",
    )
    (guide_dir / "essentials" / "watchers.md").write_text(
        "# Watchers\n\nWatchers run a callback whenever a piece of reactive state changes.",
        encoding="utf-8",
    )
    (guide_dir / "notes.txt").write_text("# Ignored\n\nnot markdown", encoding="utf-8")
    return guide_dir

def test_directory_importer(guide_repo):
    importer = DirectoryImporter(guide_repo, delimiter="---8<---")
    blocks = importer.get_all_blocks()
    assert [block.position for block in blocks] == [0, 1, 2]
    # sorted path order: essentials/ before introduction.md
    assert blocks[0].source_ref == "essentials/watchers.md#0"
    assert blocks[1].source_ref == "introduction.md#0"
    assert blocks[2].source_ref == "introduction.md#1"
    assert all(block.title != "# Ignored" for block in blocks)

def test_directory_importer_custom_pattern(guide_repo):
    importer = DirectoryImporter(guide_repo, pattern="*.txt", delimiter="---8<---")
    blocks = importer.get_all_blocks()
    assert len(blocks) == 1
    assert blocks[0].title == "# Ignored"

def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        DirectoryImporter(tmp_path / "missing")

def test_collate_directory(guide_repo):
    corpus = collate_path(guide_repo, threshold=0.85, delimiter="---8<---")
    titles = [block.title for block in corpus.canonical_blocks()]
    assert titles == ["# Watchers", "# Introduction"]
    assert corpus.clusters[1].size == 2

def test_collate_file(guide_repo):
    corpus = collate_path(guide_repo / "introduction.md", threshold=0.85, delimiter="---8<---")
    assert len(corpus.blocks) == 2
    assert len(corpus.canonical_blocks()) == 1
    # byte-identical copies: the later one is kept
    assert corpus.canonical_blocks()[0].position == 1

def test_from_file_source_ref(guide_repo):
    path = guide_repo / "introduction.md"
    blocks = DelimitedTextImporter.from_file(path, delimiter="---8<---").get_all_blocks()
    assert blocks[0].source_ref == f"{path}#0"

def test_importer_for_path(guide_repo, monkeypatch):
    assert isinstance(importer_for_path(guide_repo), DirectoryImporter)
    assert isinstance(importer_for_path(guide_repo / "introduction.md"), DelimitedTextImporter)

    monkeypatch.setattr("sys.stdin", io.StringIO("# A\n\nalpha\n---8<---\n# B\n\nbeta"))
    blocks = importer_for_path("-", delimiter="---8<---").get_all_blocks()
    assert [block.source_ref for block in blocks] == ["<stdin>#0", "<stdin>#1"]

def test_importer_for_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        importer_for_path(tmp_path / "missing.md")
