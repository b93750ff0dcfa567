import threading
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

from encore_release.data import BuildRequest
from encore_release.dist import Toolchain


@pytest.fixture
def tmp_cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Use isolated temporary directory for the download cache.

    This fixture sets ENCORE_RELEASE_CACHE_PATH to a unique temporary directory for
    each test, preventing cache pollution between tests.
    """
    cache = tmp_path / "cache"
    monkeypatch.setenv("ENCORE_RELEASE_CACHE_PATH", str(cache))
    return cache


@pytest.fixture
def fake_repo(tmp_path: Path) -> Path:
    """Create a minimal product checkout with the runtime sources the builder copies."""
    repo = tmp_path / "repo"
    go_runtime = repo / "runtimes" / "go"
    (go_runtime / "appruntime").mkdir(parents=True)
    (go_runtime / "go.mod").write_text("module encore.dev\n")
    (go_runtime / "appruntime" / "app.go").write_text("package appruntime\n")

    (repo / "runtimes" / "jscore" / "api").mkdir(parents=True)
    (repo / "runtimes" / "jscore" / "api" / "version.cjs").write_text("stale\n")

    js_dist = repo / "runtimes" / "js" / "dist"
    js_dist.mkdir(parents=True)
    (js_dist / "index.js").write_text("module.exports = {};\n")
    return repo


@pytest.fixture
def make_request(tmp_path: Path, fake_repo: Path):
    """Factory for BuildRequests rooted in the temporary directory."""

    def _make(os: str = "linux", arch: str = "amd64", version: str = "1.2.3") -> BuildRequest:
        return BuildRequest(
            os=os,
            arch=arch,
            tsparser_path=tmp_path / "tsparser",
            dist_build_dir=tmp_path / "dist" / f"{os}_{arch}",
            artifacts_tar_file=tmp_path / "artifacts" / f"encore-{version}-{os}_{arch}.tar.gz",
            version=version,
            repo_root=fake_repo,
        )

    return _make


class StubToolchain:
    """Records collaborator calls and writes placeholder outputs instead of compiling."""

    def __init__(self, tmp_path: Path) -> None:
        self._tmp_path = tmp_path
        self._lock = threading.Lock()
        self.calls: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []
        self.fail: Dict[str, BaseException] = {}

    def _record(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> None:
        with self._lock:
            self.calls.append((name, args, kwargs))
        if name in self.fail:
            raise self.fail[name]

    def calls_to(self, name: str) -> List[Tuple[Tuple[Any, ...], Dict[str, Any]]]:
        return [(a, k) for n, a, k in self.calls if n == name]

    def compile_go(self, out_path, target, linker_flags, goos, goarch, **kwargs):
        self._record("compile_go", (out_path, target, linker_flags, goos, goarch), kwargs)
        Path(out_path).write_text(f"go:{target}")

    def compile_rust(self, artifact_name, out_path, cargo_dir, goos, goarch, *env, **kwargs):
        self._record(
            "compile_rust", (artifact_name, out_path, cargo_dir, goos, goarch, *env), kwargs
        )
        Path(out_path).write_text(f"rust:{artifact_name}")

    def fetch_release(self, owner, repo, goos, goarch, **kwargs) -> Path:
        self._record("fetch_release", (owner, repo, goos, goarch), kwargs)
        return self._tmp_path / f"{repo}-{goos}_{goarch}.tar.gz"

    def extract(self, archive: Path, dest: Path) -> None:
        self._record("extract", (archive, dest), {})
        (Path(dest) / "encore-go" / "bin").mkdir(parents=True, exist_ok=True)
        (Path(dest) / "encore-go" / "bin" / "go").write_text("go")

    def archive(self, src_dir: Path, out_file: Path) -> None:
        self._record("archive", (src_dir, out_file), {})
        Path(out_file).parent.mkdir(parents=True, exist_ok=True)
        Path(out_file).write_bytes(b"archive")

    def toolchain(self) -> Toolchain:
        return Toolchain(
            compile_go=self.compile_go,
            compile_rust=self.compile_rust,
            fetch_release=self.fetch_release,
            extract=self.extract,
            archive=self.archive,
        )


@pytest.fixture
def stub_toolchain(tmp_path: Path) -> StubToolchain:
    return StubToolchain(tmp_path)

