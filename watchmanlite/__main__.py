from watchmanlite.main import watchmanlite

watchmanlite()
