"""
Core dependency catalog for framework projects.

Declares the direct library coordinates each build scope needs. Resolution,
download and classpath assembly belong to the build tool consuming the
catalog; this module only states what is wanted.
"""

import os
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple, Union

from .dependency import Dependency, patterns_of
from .versions import satisfies_constraint

if TYPE_CHECKING:
    from .cli_config import ComprehensiveConfig

DEFAULT_TARGET_PLATFORM_VERSION = "3.0"
ASYNC_SUPPORT_CONSTRAINT = "3.0 > *"

SCRIPTING_RUNTIME_ENV_VAR = "CI_GROOVY_VERSION"
DEFAULT_SCRIPTING_RUNTIME_VERSION = "2.4.10"
SPRING_VERSION = "4.1.9.RELEASE"
LOG4J_VERSION = "1.2.17"
H2_VERSION = "1.3.176"
JAXB_VERSION = "2.0"
SERVLET_API_VERSION = "3.0.1"
SPOCK_VERSION = "1.0-groovy-2.4"
CGLIB_VERSION = "2.2.2"
JUNIT_VERSION = "4.12"

FRAMEWORK_GROUP = "org.grails"
COMPILE_PLUGINS = (
    "grails-plugin-rest",
    "grails-plugin-databinding",
    "grails-plugin-i18n",
    "grails-plugin-filters",
    "grails-plugin-gsp",
    "grails-plugin-log4j",
    "grails-plugin-services",
    "grails-plugin-servlets",
    "grails-plugin-url-mappings",
)

SPOCK_EXCLUDES = ("org.codehaus.groovy:groovy-all", "junit:junit-dep")
LOGGING_EXCLUDES = (
    "javax.mail:mail",
    "javax.jms:jms",
    "com.sun.jdmk:jmxtools",
    "com.sun.jmx:jmxri",
)


class Scope(Enum):
    """Build phases a dependency can be declared for."""

    BUILD = "build"
    DOC = "doc"
    PROVIDED = "provided"
    COMPILE = "compile"
    RUNTIME = "runtime"
    TEST = "test"

    @classmethod
    def parse(cls, value: Union["Scope", str]) -> "Scope":
        if isinstance(value, Scope):
            return value
        return cls(value.strip().lower())


class DependencyCatalog:
    """
    Immutable set of core dependencies, grouped by build scope.

    Everything is computed once in the constructor. Passing the scripting
    runtime override explicitly keeps the catalog independent of process
    state; use ``from_environment`` to honour ``CI_GROOVY_VERSION``.
    """

    def __init__(
        self,
        platform_version: str,
        target_platform_version: Optional[str] = None,
        legacy_compatible: bool = False,
        framework_project: bool = True,
        scripting_runtime_version: Optional[str] = None,
    ):
        self._platform_version = platform_version
        self._target_platform_version = (
            target_platform_version or DEFAULT_TARGET_PLATFORM_VERSION
        )
        self._legacy_compatible = bool(legacy_compatible)
        self._framework_project = bool(framework_project)
        self._groovy_version = (
            scripting_runtime_version or DEFAULT_SCRIPTING_RUNTIME_VERSION
        )

        self._build = self._build_scope()
        self._doc = self._doc_scope()
        self._provided = self._provided_scope()
        self._compile = self._compile_scope()
        self._test = self._test_scope()
        self._runtime = self._runtime_scope()

    @classmethod
    def from_environment(
        cls,
        platform_version: str,
        target_platform_version: Optional[str] = None,
        legacy_compatible: bool = False,
        framework_project: bool = True,
    ) -> "DependencyCatalog":
        """Create a catalog using the CI scripting runtime override, if set."""
        return cls(
            platform_version,
            target_platform_version,
            legacy_compatible,
            framework_project,
            scripting_runtime_version=os.environ.get(SCRIPTING_RUNTIME_ENV_VAR),
        )

    @classmethod
    def from_config(cls, config: "ComprehensiveConfig") -> "DependencyCatalog":
        settings = config.catalog
        return cls(
            settings.platform_version or "",
            settings.target_platform_version,
            settings.legacy_compatible,
            settings.framework_project,
            settings.scripting_runtime_version,
        )

    def _platform(self, name: str, *exclusions: str) -> Dependency:
        return Dependency.of(FRAMEWORK_GROUP, name, self._platform_version, True, *exclusions)

    def _build_scope(self) -> Tuple[Dependency, ...]:
        return (
            Dependency.of("xalan", "serializer", "2.7.2", True, "xml-apis:xml-apis"),
            self._platform("grails-bootstrap"),
            self._platform(
                "grails-project-api", "org.grails:grails-core", "org.grails:grails-web"
            ),
            self._platform("grails-scripts"),
        )

    def _doc_scope(self) -> Tuple[Dependency, ...]:
        return (self._platform("grails-docs"),)

    def _provided_scope(self) -> Tuple[Dependency, ...]:
        return (Dependency("javax.servlet", "javax.servlet-api", SERVLET_API_VERSION),)

    def _compile_scope(self) -> Tuple[Dependency, ...]:
        dependencies: List[Dependency] = [
            Dependency("org.codehaus.groovy", "groovy-all", self._groovy_version)
        ]
        dependencies.extend(self._platform(plugin) for plugin in COMPILE_PLUGINS)

        # Servlet 3.x async support, checked before legacy compatibility
        if satisfies_constraint(self._target_platform_version, ASYNC_SUPPORT_CONSTRAINT):
            dependencies.append(
                self._platform("grails-plugin-async", "javax:javaee-web-api")
            )

        if self._legacy_compatible:
            dependencies.append(Dependency("javax.xml", "jaxb-api", JAXB_VERSION))

        return tuple(dependencies)

    def _test_scope(self) -> Tuple[Dependency, ...]:
        junit = Dependency("junit", "junit", JUNIT_VERSION)
        testing_plugin = self._platform("grails-plugin-testing")

        if self._framework_project:
            return (
                testing_plugin,
                Dependency.of(
                    "org.spockframework", "spock-core", SPOCK_VERSION, True, *SPOCK_EXCLUDES
                ),
                Dependency("cglib", "cglib-nodep", CGLIB_VERSION),
                junit,
            )
        # Plain projects put junit first
        return (junit, testing_plugin)

    def _runtime_scope(self) -> Tuple[Dependency, ...]:
        return (
            Dependency("com.h2database", "h2", H2_VERSION),
            Dependency.of("log4j", "log4j", LOG4J_VERSION, True, *LOGGING_EXCLUDES),
            self._platform("grails-resources"),
        )

    @property
    def platform_version(self) -> str:
        return self._platform_version

    @property
    def target_platform_version(self) -> str:
        return self._target_platform_version

    # Servlet naming kept alongside the generic one for build tool callers
    @property
    def servlet_version(self) -> str:
        return self._target_platform_version

    @property
    def legacy_compatible(self) -> bool:
        return self._legacy_compatible

    @property
    def framework_project(self) -> bool:
        return self._framework_project

    @property
    def groovy_version(self) -> str:
        return self._groovy_version

    @property
    def spring_version(self) -> str:
        return SPRING_VERSION

    @property
    def log4j_version(self) -> str:
        return LOG4J_VERSION

    @property
    def h2_version(self) -> str:
        return H2_VERSION

    @property
    def jaxb_version(self) -> str:
        return JAXB_VERSION

    @property
    def servlet_api_version(self) -> str:
        return SERVLET_API_VERSION

    @property
    def spock_version(self) -> str:
        return SPOCK_VERSION

    @property
    def cglib_version(self) -> str:
        return CGLIB_VERSION

    @property
    def junit_version(self) -> str:
        return JUNIT_VERSION

    @property
    def build_dependencies(self) -> Tuple[Dependency, ...]:
        return self._build

    @property
    def doc_dependencies(self) -> Tuple[Dependency, ...]:
        return self._doc

    @property
    def provided_dependencies(self) -> Tuple[Dependency, ...]:
        return self._provided

    @property
    def compile_dependencies(self) -> Tuple[Dependency, ...]:
        return self._compile

    @property
    def runtime_dependencies(self) -> Tuple[Dependency, ...]:
        return self._runtime

    @property
    def test_dependencies(self) -> Tuple[Dependency, ...]:
        return self._test

    @property
    def build_dependency_patterns(self) -> Tuple[str, ...]:
        """Patterns of the build scope, used to filter resolved artifacts."""
        return patterns_of(self._build)

    def version_pins(self) -> Dict[str, str]:
        """Return the pinned third-party versions keyed by component."""
        return {
            "groovy": self._groovy_version,
            "spring": SPRING_VERSION,
            "log4j": LOG4J_VERSION,
            "h2": H2_VERSION,
            "jaxb": JAXB_VERSION,
            "servlet_api": SERVLET_API_VERSION,
            "spock": SPOCK_VERSION,
            "cglib": CGLIB_VERSION,
            "junit": JUNIT_VERSION,
        }

    def scopes(self) -> Dict[Scope, Tuple[Dependency, ...]]:
        """Return every scope in declaration order."""
        return {
            Scope.BUILD: self._build,
            Scope.DOC: self._doc,
            Scope.PROVIDED: self._provided,
            Scope.COMPILE: self._compile,
            Scope.RUNTIME: self._runtime,
            Scope.TEST: self._test,
        }

    def dependencies_for(self, scope: Union[Scope, str]) -> Tuple[Dependency, ...]:
        """
        Look up a single scope.

        Raises:
            ValueError: If a scope name is not recognised
        """
        return self.scopes()[Scope.parse(scope)]

    def all_dependencies(self) -> Tuple[Dependency, ...]:
        return tuple(dep for deps in self.scopes().values() for dep in deps)

    def to_dict(self) -> Dict[str, object]:
        return {
            "platform_version": self._platform_version,
            "target_platform_version": self._target_platform_version,
            "legacy_compatible": self._legacy_compatible,
            "framework_project": self._framework_project,
            "versions": self.version_pins(),
            "scopes": {
                scope.value: [dep.to_dict() for dep in deps]
                for scope, deps in self.scopes().items()
            },
        }

    def __repr__(self) -> str:
        return (
            f"DependencyCatalog(platform_version={self._platform_version!r}, "
            f"target_platform_version={self._target_platform_version!r}, "
            f"legacy_compatible={self._legacy_compatible}, "
            f"framework_project={self._framework_project})"
        )
