"""
Swift Runtime Support.

Fixed Swift source shipped next to the generated declarations. It provides
the Flow collector used by stream wrappers and the error type thrown by async
adapters. The text does not depend on the input declarations and is written
verbatim by the build step.
"""

RUNTIME_FILENAME = "KtBridgeRuntime.swift"
GENERATED_FILENAME = "KtBridge.swift"

COLLECTOR_CLASS = "KtBridgeFlowCollector"
ERROR_TYPE = "KtBridgeError"

_RUNTIME_SOURCE = """\
// MARK: - KtBridge Runtime Support
// Helpers shared by the generated async and stream bridges.

import Foundation

/// Receives values pushed by a Kotlin Flow and forwards them to Swift callbacks.
///
/// At most one terminal event (completion or error) is delivered. After
/// `cancel()`, emitted values are rejected so the producing `collect` call
/// fails and the upstream subscription is torn down.
public final class KtBridgeFlowCollector<T>: NSObject {
    private let onEmit: (T) -> Void
    private let onComplete: () -> Void
    private let onError: (Error) -> Void
    private let lock = NSLock()
    private var terminated = false
    private var cancelled = false

    public init(
        onEmit: @escaping (T) -> Void,
        onComplete: @escaping () -> Void,
        onError: @escaping (Error) -> Void
    ) {
        self.onEmit = onEmit
        self.onComplete = onComplete
        self.onError = onError
    }

    public var isCancelled: Bool {
        lock.lock()
        defer { lock.unlock() }
        return cancelled
    }

    /// Delivers one value. Returns false once the collector is cancelled or terminated.
    @discardableResult
    public func emit(_ value: T) -> Bool {
        lock.lock()
        let active = !terminated && !cancelled
        lock.unlock()
        if active {
            onEmit(value)
        }
        return active
    }

    /// Entry point used by the Kotlin `FlowCollector` export.
    public func emit(value: Any?, completionHandler: @escaping (Error?) -> Void) {
        guard let typed = value as? T, emit(typed) else {
            completionHandler(KtBridgeError.cancelled)
            return
        }
        completionHandler(nil)
    }

    public func complete() {
        if markTerminated() {
            onComplete()
        }
    }

    public func error(_ error: Error) {
        if markTerminated() {
            onError(error)
        }
    }

    public func cancel() {
        lock.lock()
        cancelled = true
        lock.unlock()
    }

    private func markTerminated() -> Bool {
        lock.lock()
        defer { lock.unlock() }
        if terminated {
            return false
        }
        terminated = true
        return true
    }
}

extension Optional {
    /// Unwraps a Kotlin result or throws `KtBridgeError.nullResult`.
    func unwrap(or error: Error = KtBridgeError.nullResult) throws -> Wrapped {
        guard let value = self else {
            throw error
        }
        return value
    }
}

public enum KtBridgeError: Error, LocalizedError {
    case nullResult
    case cancelled
    case kotlinException(message: String)

    public var errorDescription: String? {
        switch self {
        case .nullResult:
            return "Unexpected null result from Kotlin"
        case .cancelled:
            return "Collection cancelled by the Swift consumer"
        case .kotlinException(let message):
            return "Kotlin exception: \\(message)"
        }
    }
}
"""


def generate() -> str:
  """
  Returns the runtime support Swift source.

  Returns:
      str: Complete contents of `RUNTIME_FILENAME`.
  """
  return _RUNTIME_SOURCE
