"""
Basic QuickFire Usage Examples

Declares typed request specs and consumes results through Deferred.
"""

from src.quickfire import (
    BodyMode,
    NetworkConfig,
    NetworkError,
    NetworkManager,
    RequestSpec,
    set_default_config,
)


class Post:
    """Response type built from parsed JSON."""

    def __init__(self, post_id, title):
        self.id = post_id
        self.title = title

    @classmethod
    def from_json(cls, data):
        if isinstance(data, dict) and "id" in data and isinstance(data.get("title"), str):
            return cls(data["id"], data["title"])
        return None


class PostDetailRequest(RequestSpec):
    response_type = Post

    def __init__(self, post_id):
        super().__init__(f"GET /posts/{post_id}")


class CreatePostRequest(RequestSpec):
    endpoint = "POST /posts"
    body_mode = BodyMode.JSON
    response_type = Post

    def __init__(self, title, body):
        super().__init__(parameters={"title": title, "body": body, "userId": "1"})


def report(error: NetworkError):
    if error.has_readable_message:
        print(f"Failed: {error.description}")
    else:
        print(f"Failed ({error.kind.value})")


def get_with_callbacks(manager):
    """Subscribe with then/catch."""
    print("\n=== GET with callbacks ===")

    deferred = PostDetailRequest(1).execute(manager=manager)
    deferred.then(lambda post: print(f"Post {post.id}: {post.title}")).catch(report)
    deferred.wait(timeout=30)


def post_json_and_wait(manager):
    """Block on the result."""
    print("\n=== POST JSON ===")

    post = CreatePostRequest("My Post", "This is the content").execute(manager=manager).wait(timeout=30)
    print(f"Created: {post.id}")


def query_parameters(manager):
    """GET with list parameters, raw JSON result."""
    print("\n=== Query parameters ===")

    spec = RequestSpec("GET /comments", parameters={"postId": ["1", "2"]})
    comments = spec.execute(manager=manager).wait(timeout=30)
    print(f"{len(comments)} comments")


def delete_request(manager):
    """DELETE; an empty response body fulfills with ''."""
    print("\n=== DELETE ===")

    result = RequestSpec("DELETE /posts/1").execute(manager=manager).wait(timeout=30)
    print(f"Deleted: {result!r}")


if __name__ == "__main__":
    set_default_config(NetworkConfig(base_url="https://jsonplaceholder.typicode.com", debug=True))

    with NetworkManager() as manager:
        get_with_callbacks(manager)
        post_json_and_wait(manager)
        query_parameters(manager)
        delete_request(manager)
