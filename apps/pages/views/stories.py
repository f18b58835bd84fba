from __future__ import annotations

from django.http import Http404

from apps.cms.queries import get_all_blog_posts, get_blog_post_by_slug
from apps.widgets.back import BackButton

from ..mixins import ContentPageView

FEATURED_STORIES = 4


class StoriesView(ContentPageView):
    template_name = "pages/stories.html"
    cache_tags = ("posts",)
    meta_title_key = "storiesPage.metadata.title"
    meta_description_key = "storiesPage.metadata.description"

    def get_fetches(self):
        return {"posts": get_all_blog_posts}

    def get_content(self, results):
        posts = results["posts"]
        return {"featured": posts[:FEATURED_STORIES], "others": posts[FEATURED_STORIES:]}


class StoryView(ContentPageView):
    template_name = "pages/story.html"
    meta_type = "article"
    back_url = "/stories/"
    back_label_key = "backButton.stories"

    def get_cache_tags(self):
        return [f"post-{self.kwargs['slug']}", "posts"]

    def get_fetches(self):
        slug = self.kwargs["slug"]
        return {"post": lambda: get_blog_post_by_slug(slug)}

    def get_content(self, results):
        post = results["post"]
        if post is None:
            raise Http404("Post not found")
        self.post_obj = post
        return {
            "post": post,
            "back": BackButton(label=self.page.t(self.back_label_key), url=self.back_url),
        }

    def get_meta_title(self, page):
        return self.post_obj.title

    def get_meta_description(self, page):
        return self.post_obj.excerpt or ""

    def get_meta_image(self):
        return self.post_obj.main_image_url


class BlogPostView(StoryView):
    """/blog/<slug>/: same post, reached from the home page and shared links."""

    template_name = "pages/blog_post.html"
    back_url = "/"
    back_label_key = "backButton.label"
