"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Sample Kotlin sources shared by scanner, engine and CLI tests.
- Console reset so tests capturing log output do not leak handlers.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'ktbridge' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from ktbridge.utils.console import reset_console  # noqa: E402

NETWORK_RESULT_KT = """\
package com.example

/**
 * Wrapper for network calls.
 * sealed class Commented { }
 */
@SwiftEnum(name = "NetworkResult", exhaustive = true)
sealed class NetworkResult<out T> {
    data class Success<T>(val data: T) : NetworkResult<T>()
    data class Error(val message: String, val code: Int?) : NetworkResult<Nothing>()
    object Loading : NetworkResult<Nothing>()
}
"""

USER_REPOSITORY_KT = """\
package com.example

import kotlinx.coroutines.flow.Flow

class UserRepository {
    // suspend fun commentedOut(): String
    @SwiftAsync
    suspend fun fetchUser(id: String): User {
        return User(id)
    }

    suspend fun search(query: String, limit: Int = 10, includeArchived: Boolean = false): List<User> = emptyList()

    suspend fun delete(id: String) {
    }

    @SwiftFlow
    val updates: Flow<Int> = flowOf(1)

    fun observe(userId: String): Flow<User> = flowOf()
}

suspend fun ping(host: String = "localhost"): Boolean = true
"""


@pytest.fixture
def network_result_source() -> str:
  """Sealed hierarchy with a data case, a nullable property and an object case."""
  return NETWORK_RESULT_KT


@pytest.fixture
def user_repository_source() -> str:
  """Class with suspend functions (with and without defaults) and Flow members."""
  return USER_REPOSITORY_KT


@pytest.fixture
def kotlin_project(tmp_path: Path) -> Path:
  """A directory holding both sample sources as .kt files."""
  src = tmp_path / "src"
  src.mkdir()
  (src / "NetworkResult.kt").write_text(NETWORK_RESULT_KT, encoding="utf-8")
  (src / "UserRepository.kt").write_text(USER_REPOSITORY_KT, encoding="utf-8")
  return src


@pytest.fixture(autouse=True)
def clean_console():
  """Ensures logging is routed to a fresh stdout console for every test."""
  reset_console()
  yield
  reset_console()
