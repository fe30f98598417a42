"""
Detection of the continuous-integration server the build is running on.
"""

from collections.abc import Mapping
import enum
import os

LOCAL_BUILD_VERSION = "0.1.0.0"
BUILD_VERSION_ENV_VAR = "XPKG_BUILD_VERSION"


class BuildServer(enum.Enum):
    LOCAL = "local"
    TEAMCITY = "teamcity"
    JENKINS = "jenkins"
    TRAVIS = "travis"
    APPVEYOR = "appveyor"
    GITHUB_ACTIONS = "github-actions"
    GITLAB_CI = "gitlab-ci"
    AZURE_PIPELINES = "azure-pipelines"
    GENERIC_CI = "ci"


# Order matters: the generic "CI" marker is set by most servers too.
_SERVER_MARKERS: tuple[tuple[str, BuildServer], ...] = (
    ("TEAMCITY_VERSION", BuildServer.TEAMCITY),
    ("JENKINS_URL", BuildServer.JENKINS),
    ("TRAVIS", BuildServer.TRAVIS),
    ("APPVEYOR", BuildServer.APPVEYOR),
    ("GITHUB_ACTIONS", BuildServer.GITHUB_ACTIONS),
    ("GITLAB_CI", BuildServer.GITLAB_CI),
    ("TF_BUILD", BuildServer.AZURE_PIPELINES),
    ("CI", BuildServer.GENERIC_CI),
)

_VERSION_VARS: dict[BuildServer, str] = {
    BuildServer.TEAMCITY: "BUILD_NUMBER",
    BuildServer.JENKINS: "BUILD_NUMBER",
    BuildServer.TRAVIS: "TRAVIS_BUILD_NUMBER",
    BuildServer.APPVEYOR: "APPVEYOR_BUILD_VERSION",
    BuildServer.GITHUB_ACTIONS: "GITHUB_RUN_NUMBER",
    BuildServer.GITLAB_CI: "CI_PIPELINE_IID",
    BuildServer.AZURE_PIPELINES: "BUILD_BUILDNUMBER",
    BuildServer.GENERIC_CI: "BUILD_NUMBER",
}


def detect_build_server(environ: Mapping[str, str] | None = None) -> BuildServer:
    env = os.environ if environ is None else environ
    for marker, server in _SERVER_MARKERS:
        if env.get(marker):
            return server
    return BuildServer.LOCAL


def is_local_build(environ: Mapping[str, str] | None = None) -> bool:
    return detect_build_server(environ) is BuildServer.LOCAL


def build_version(environ: Mapping[str, str] | None = None) -> str:
    """
    Returns the version supplied by the build server.

    An explicit XPKG_BUILD_VERSION always wins. Otherwise the server's own
    build counter is used, falling back to the local placeholder version.
    """
    env = os.environ if environ is None else environ
    explicit = env.get(BUILD_VERSION_ENV_VAR)
    if explicit:
        return explicit

    server = detect_build_server(env)
    var_name = _VERSION_VARS.get(server)
    if var_name and env.get(var_name):
        return env[var_name]
    return LOCAL_BUILD_VERSION
