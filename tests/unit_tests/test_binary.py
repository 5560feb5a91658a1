"""Tests for the kops binary provisioner."""

import os

import httpx
import pytest

from kops_gce.core.deployments.gce_kops import Platform, ensure_binary


def test_existing_binary_makes_no_network_calls(make_config, release_server, reporter) -> None:
    config = make_config()
    config.work_dir.bin_dir.mkdir(parents=True)
    config.work_dir.binary_path.write_text("existing")

    with release_server.client() as client:
        assert ensure_binary(client, config, reporter) is None

    assert release_server.requests == []
    assert config.work_dir.binary_path.read_text() == "existing"


def test_downloads_latest_release(make_config, release_server, reporter) -> None:
    config = make_config()

    with release_server.client() as client:
        binary = ensure_binary(client, config, reporter)

    assert binary is not None
    assert binary.version == "v1.30.1"
    assert binary.path == config.work_dir.binary_path
    assert binary.path.read_bytes() == release_server.payload
    assert os.access(binary.path, os.X_OK)
    assert [str(request.url) for request in release_server.requests] == [
        config.release_api_url,
        f"{config.download_base_url}/v1.30.1/kops-linux-amd64",
    ]
    assert list(config.work_dir.bin_dir.iterdir()) == [binary.path]


def test_mac_downloads_darwin_artifact(make_config, release_server, reporter) -> None:
    config = make_config(platform=Platform.MAC)

    with release_server.client() as client:
        ensure_binary(client, config, reporter)

    assert release_server.requests[-1].url.path.endswith("/kops-darwin-amd64")


def test_download_failure_is_fatal_and_leaves_no_binary(make_config, reporter) -> None:
    config = make_config()
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.host == "api.github.com":
            return httpx.Response(200, json={"tag_name": "v1.30.1"})
        return httpx.Response(503)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(httpx.HTTPStatusError):
            ensure_binary(client, config, reporter)

    assert len(calls) == 2
    assert not config.work_dir.binary_path.exists()
    assert list(config.work_dir.bin_dir.iterdir()) == []


def test_release_metadata_without_tag(make_config, reporter) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))

    with httpx.Client(transport=transport) as client:
        with pytest.raises(RuntimeError, match="tag_name"):
            ensure_binary(client, make_config(), reporter)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>rate limited</html>"),
        httpx.Response(200, json=[{"tag_name": "v1.30.1"}]),
    ],
    ids=["html", "list"],
)
def test_unreadable_release_metadata_is_a_runtime_error(
    make_config, reporter, response: httpx.Response
) -> None:
    config = make_config()
    transport = httpx.MockTransport(lambda request: response)

    with httpx.Client(transport=transport) as client:
        with pytest.raises(RuntimeError, match="Release metadata"):
            ensure_binary(client, config, reporter)

    assert not config.work_dir.binary_path.exists()
