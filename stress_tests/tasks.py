from locust import HttpUser, task, between
import random

_pages = ['https://example.com/', 'https://www.python.org/', 'https://www.wikipedia.org/']


class ScraperUser(HttpUser):
    wait_time = between(0.5, 2)

    @task
    def get_home(self):
        self.client.get('/', name='Get home form')

    @task
    def post_go(self):
        idx = random.randint(0, len(_pages) - 1)
        self.client.post('/go', data={'url': _pages[idx]}, name='Scrape page')
